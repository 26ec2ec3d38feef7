import pytest

from celerity.nbt.tags import (
    NamedTag,
    TagByte,
    TagByteArray,
    TagCompound,
    TagDouble,
    TagEnd,
    TagFloat,
    TagInt,
    TagIntArray,
    TagList,
    TagLong,
    TagLongArray,
    TagShort,
    TagString,
    TagType,
    downcast,
)


@pytest.mark.parametrize("type_id", range(13))
def test_from_id_round_trip(type_id):
    assert TagType.from_id(type_id).value == type_id


@pytest.mark.parametrize("type_id", [13, 255, -1])
def test_from_id_rejects_unknown(type_id):
    with pytest.raises(ValueError):
        TagType.from_id(type_id)


@pytest.mark.parametrize(
    "type_id, expected",
    [(0, "TAG_End"), (1, "TAG_Byte"), (9, "TAG_List"), (10, "TAG_Compound"), (12, "TAG_LongArray")],
)
def test_type_names(type_id, expected):
    assert TagType.from_id(type_id).type_name == expected


def test_type_name_of_tag_instance():
    assert TagCompound().type.type_name == "TAG_Compound"


@pytest.mark.parametrize(
    "tag, expected",
    [
        (TagEnd(), TagType.END),
        (TagByte(1), TagType.BYTE),
        (TagShort(1), TagType.SHORT),
        (TagInt(1), TagType.INT),
        (TagLong(1), TagType.LONG),
        (TagFloat(1.0), TagType.FLOAT),
        (TagDouble(1.0), TagType.DOUBLE),
        (TagByteArray((1, 2)), TagType.BYTE_ARRAY),
        (TagString("x"), TagType.STRING),
        (TagList(TagType.INT), TagType.LIST),
        (TagCompound(), TagType.COMPOUND),
        (TagIntArray((1,)), TagType.INT_ARRAY),
        (TagLongArray((1,)), TagType.LONG_ARRAY),
    ],
)
def test_tag_type_property(tag, expected):
    assert tag.type == expected


@pytest.mark.parametrize(
    "cls, value",
    [(TagByte, 128), (TagByte, -129), (TagShort, 32768), (TagInt, 2**31), (TagLong, 2**63)],
)
def test_integer_range_checked(cls, value):
    with pytest.raises(ValueError):
        cls(value)


def test_integer_bounds_accepted():
    assert TagByte(-128).value == -128
    assert TagInt(2**31 - 1).value == 2**31 - 1


def test_array_values_checked_and_stored_as_tuple():
    assert TagIntArray([1, 2, 3]).values == (1, 2, 3)
    with pytest.raises(ValueError):
        TagByteArray([0, 200])


def test_float_is_rounded_to_single_precision():
    assert TagFloat(0.5).value == 0.5
    rounded = TagFloat(0.1).value
    assert rounded != 0.1 and abs(rounded - 0.1) < 1e-7


def test_equality_depends_on_tag_class():
    assert TagByte(3) == TagByte(3)
    assert TagByte(3) != TagShort(3)


def test_list_add_and_iterate():
    tag_list = TagList(TagType.STRING)
    tag_list.add(TagString("a"))
    tag_list.add(TagString("b"))
    assert [t.value for t in tag_list] == ["a", "b"]
    assert len(tag_list) == 2


def test_list_add_wrong_type_rejected():
    tag_list = TagList(TagType.INT, [TagInt(1)])
    with pytest.raises(ValueError):
        tag_list.add(TagLong(1))
    assert len(tag_list) == 1


def test_list_constructor_rejects_mixed_items():
    with pytest.raises(ValueError):
        TagList(TagType.INT, [TagInt(1), TagShort(2)])


def test_compound_preserves_order():
    compound = TagCompound()
    compound.add("first", TagInt(1))
    compound.add_named(NamedTag("second", TagString("two")))
    compound.add("first", TagInt(3))
    assert [n.name for n in compound] == ["first", "second", "first"]
    assert compound.tags[1].tag == TagString("two")
    assert len(compound) == 3


def test_downcast_returns_same_object():
    tag = TagLong(7)
    assert downcast(tag, TagLong) is tag


def test_downcast_wrong_type_raises():
    with pytest.raises(TypeError):
        downcast(TagInt(7), TagLong)
    with pytest.raises(TypeError):
        downcast(None, TagInt)