import pytest

from bencodec import dump
from bencodec.decoder import decode
from bencodec.encoder import encode
from bencodec.errors import BencodeEncodeError, KeyNotFound, TypeMismatch
from bencodec.structure import BencodeDict, BencodeInt, BencodeList, BencodeString, wrap


def test_accessors():
    obj = decode(b"d3:inti7e4:listl1:xe3:str3:abce")
    assert obj.get(b"int").as_integer() == 7
    assert obj.get(b"str").as_string() == b"abc"
    assert obj.get(b"list").as_list() == (BencodeString(b"x"),)
    assert set(obj.as_dict()) == {b"int", b"list", b"str"}


def test_type_mismatch():
    obj = decode(b"l1:a1:be")
    with pytest.raises(TypeMismatch) as excinfo:
        obj.as_integer()
    print("Error:", excinfo.value)
    assert excinfo.value.expected == "integer"
    assert excinfo.value.actual == "list"

    with pytest.raises(TypeMismatch):
        BencodeInt(1).as_string()
    with pytest.raises(TypeMismatch):
        BencodeString(b"1").as_integer()
    with pytest.raises(TypeMismatch):
        BencodeString(b"1").as_dict()
    with pytest.raises(TypeMismatch):
        obj.get(b"a")


def test_key_not_found():
    obj = decode(b"d3:cow3:mooe")
    with pytest.raises(KeyNotFound) as excinfo:
        obj.get(b"announce")
    assert excinfo.value.key == b"announce"
    with pytest.raises(KeyError):
        obj[b"announce"]


def test_str_keys_are_utf8():
    obj = decode(b"d3:cow3:mooe")
    assert obj.get("cow") == obj[b"cow"]
    assert "cow" in obj
    assert b"pig" not in obj
    assert 1 not in obj
    assert None not in obj


def test_dict_iterates_in_canonical_order():
    obj = BencodeDict({b"b": BencodeInt(1), b"a": BencodeInt(2)})
    assert list(obj) == [b"a", b"b"]
    assert [k for k, _ in obj.items()] == [b"a", b"b"]


def test_values_are_immutable():
    lst = decode(b"li1ee")
    with pytest.raises(TypeError):
        lst.as_list()[0] = BencodeInt(2)

    d = decode(b"d1:ai1ee")
    with pytest.raises(TypeError):
        d.as_dict()[b"b"] = BencodeInt(2)

    source = {b"a": BencodeInt(1)}
    d = BencodeDict(source)
    source[b"b"] = BencodeInt(2)
    assert b"b" not in d


def test_structural_equality():
    assert decode(b"d1:ali1ei2eee") == BencodeDict({b"a": BencodeList([BencodeInt(1), BencodeInt(2)])})
    assert BencodeInt(1) != BencodeString(b"1")
    assert BencodeString(b"x") != b"x"
    assert len({BencodeInt(1), BencodeInt(1), BencodeString(b"1")}) == 2


def test_constructor_type_checks():
    with pytest.raises(TypeError):
        BencodeInt("1")
    with pytest.raises(TypeError):
        BencodeInt(True)
    with pytest.raises(TypeError):
        BencodeString("text")
    with pytest.raises(TypeError):
        BencodeList([1, 2])
    with pytest.raises(TypeError):
        BencodeDict({"a": BencodeInt(1)})
    with pytest.raises(TypeError):
        BencodeDict({b"a": 1})


def test_wrap_and_to_python():
    value = wrap({"name": "x", "sizes": (1, 2), b"raw": b"\x00"})
    assert value == decode(b"d4:name1:x3:raw1:\x005:sizesli1ei2eee")
    assert value.to_python() == {b"name": b"x", b"sizes": [1, 2], b"raw": b"\x00"}


@pytest.mark.parametrize("obj", [1.5, None, True, {1: 2}, {"a": 1, b"a": 2}, object()])
def test_unencodable(obj):
    with pytest.raises(BencodeEncodeError):
        encode(obj)
    with pytest.raises(BencodeEncodeError):
        wrap(obj)


def test_dump():
    obj = decode(b"d4:infod6:lengthi5e6:pieces3:\x00\x01\x02e4:tagsl1:a1:bee")
    text = dump(obj)
    print(text)
    assert text.splitlines() == [
        "dict[2]",
        "  'info': dict[2]",
        "    'length': 5",
        "    'pieces': <3 bytes 000102>",
        "  'tags': list[2]",
        "    - 'a'",
        "    - 'b'",
    ]


def test_dump_long_binary_is_truncated():
    text = dump(BencodeString(bytes(range(40))))
    assert text.startswith("<40 bytes 000102")
    assert text.endswith("...>")
