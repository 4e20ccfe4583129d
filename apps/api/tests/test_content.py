import re

from everpage_api.domain.content import (
    build_resource_index,
    en_media_to_img,
    substitute_matches,
    transform_content,
)
from everpage_api.domain.entities import Resource

PREFIX = "http://x/"


def _res(guid: str, hash_bytes: bytes) -> Resource:
    return Resource(guid=guid, body_hash=hash_bytes)


def test_body_between_container_tags() -> None:
    out = transform_content("<en-note><p>hi</p></en-note>", [], PREFIX)
    assert out.error is None
    assert out.body == "<p>hi</p>"


def test_open_tag_attributes_and_prolog_are_dropped() -> None:
    content = (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<!DOCTYPE en-note SYSTEM "http://xml.evernote.com/pub/enml2.dtd">'
        '<en-note style="word-wrap: break-word;"><div>a</div></en-note>\n'
    )
    out = transform_content(content, [], PREFIX)
    assert out.body == "<div>a</div>"


def test_known_resource_becomes_img_and_keeps_hash() -> None:
    res = _res("G1", bytes([0xAB, 0xCD]))
    out = transform_content('<en-note><en-media hash="abcd" type="image/png"/></en-note>', [res], PREFIX)
    assert out.error is None
    assert out.body == '<img src="http://x/res/G1" hash="abcd" type="image/png"/>'
    assert out.unknown_hashes == []


def test_attributes_before_hash_are_kept_in_place() -> None:
    res = _res("G2", bytes([0x01, 0x02]))
    tag = '<en-media type="image/jpeg" width="10" hash="0102" height="20"/>'
    out = transform_content(f"<en-note>{tag}</en-note>", [res], PREFIX)
    assert out.body == '<img type="image/jpeg" width="10" src="http://x/res/G2" hash="0102" height="20"/>'


def test_unknown_resource_placeholder() -> None:
    out = transform_content(
        '<en-note>a<en-media hash="deadbeef" type="image/png"/>b</en-note>',
        [_res("G1", bytes([0xAB]))],
        PREFIX,
    )
    assert out.error is None
    assert out.body == "aUnknown resource (hash=deadbeef)b"
    assert out.unknown_hashes == ["deadbeef"]


def test_media_without_hash_passes_through() -> None:
    body = '<en-media type="image/png"/><en-media hash="ABCD"/>'
    out = transform_content(f"<en-note>{body}</en-note>", [_res("G1", bytes([0xAB, 0xCD]))], PREFIX)
    # Uppercase hex is not a recognised hash attribute.
    assert out.body == body


def test_each_media_tag_resolved_independently() -> None:
    r1 = _res("G1", b"\x01")
    r2 = _res("G2", b"\x02")
    content = '<en-note><p><en-media hash="01"/> <en-media hash="03"/> <en-media hash="02"></en-media></p></en-note>'
    out = transform_content(content, [r1, r2], PREFIX)
    assert out.body == (
        '<p><img src="http://x/res/G1" hash="01"/> Unknown resource (hash=03) '
        '<img src="http://x/res/G2" hash="02"></en-media></p>'
    )
    assert out.unknown_hashes == ["03"]


def test_duplicate_hash_last_resource_wins() -> None:
    index = build_resource_index([_res("first", b"\xff"), _res("last", b"\xff")])
    assert list(index) == ["ff"]
    assert index["ff"].guid == "last"


def test_missing_open_tag() -> None:
    out = transform_content("<p>hi</p></en-note>", [], PREFIX)
    assert out.error == "missing_open_tag"


def test_missing_close_tag() -> None:
    out = transform_content("<en-note><p>hi</p>", [], PREFIX)
    assert out.error == "missing_close_tag"


def test_close_tag_only_before_open_tag_is_missing() -> None:
    out = transform_content("</en-note><en-note><p>hi</p>", [], PREFIX)
    assert out.error == "missing_close_tag"


def test_last_close_tag_is_used() -> None:
    content = "<en-note>a</en-note>b</en-note>"
    out = transform_content(content, [], PREFIX)
    assert out.body == "a</en-note>b"


def test_first_open_tag_is_used() -> None:
    out = transform_content("<en-note>a<en-note>b</en-note>", [], PREFIX)
    assert out.body == "a<en-note>b"


def test_other_text_untouched() -> None:
    body = "<div>x &amp; y <span>en-media</span> <en-crypt>zz</en-crypt></div>"
    out = transform_content(f"<en-note>{body}</en-note>", [], PREFIX)
    assert out.body == body


def test_en_media_to_img_direct() -> None:
    index = {"abcd": _res("G9", b"\xab\xcd")}
    assert en_media_to_img('<en-media hash="abcd">', index, "p/") == '<img src="p/res/G9" hash="abcd">'


def test_substitute_matches_is_ordered_and_non_overlapping() -> None:
    seen: list[int] = []

    def replace(m: re.Match[str]) -> str:
        seen.append(m.start())
        return m.group(0).upper()

    out = substitute_matches(re.compile(r"a+"), "xaayaaaz", replace)
    assert out == "xAAyAAAz"
    assert seen == [1, 4]


def test_substitute_matches_handles_empty_matches() -> None:
    out = substitute_matches(re.compile(r"x*"), "ab", lambda m: "-")
    assert out == "-a-b-"
