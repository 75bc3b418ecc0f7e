import pytest

from dsfapi.codeparameter import CodeParameter, CodeParameterError, MissingParameterError
from dsfapi.types import DriverId

BIG = "18446744073709551615"


def test_integer_value():
    p = CodeParameter("S", "42")
    assert p.value == 42
    assert p.as_int() == 42
    assert p.as_float() == 42.0
    assert p.as_uint() == 42


def test_float_value_not_int():
    p = CodeParameter("X", "1.5")
    assert p.value == 1.5
    assert p.as_float() == 1.5
    with pytest.raises(CodeParameterError):
        p.as_int()


def test_empty_value_is_zero():
    p = CodeParameter("X", "")
    assert p.value == 0
    assert p.as_int() == 0


def test_whitespace_is_trimmed_for_parsing_only():
    p = CodeParameter("S", "  7 ")
    assert p.as_int() == 7
    assert p.string_value == "  7 "


def test_expression():
    p = CodeParameter("X", "{move.x}")
    assert p.is_expression
    assert str(p) == "X{move.x}"
    with pytest.raises(CodeParameterError):
        p.as_float()


def test_int_list():
    p = CodeParameter("P", "1:2:3")
    assert p.as_int_list() == [1, 2, 3]
    assert p.as_float_list() == [1.0, 2.0, 3.0]
    assert p.as_uint_list() == [1, 2, 3]


def test_float_list():
    p = CodeParameter("P", "1.5:2")
    assert p.as_float_list() == [1.5, 2.0]
    assert p.as_int_list() == [1, 2]


def test_non_numeric_list_stays_text():
    p = CodeParameter("P", "a:b")
    assert p.value == "a:b"
    with pytest.raises(CodeParameterError):
        p.as_int_list()


def test_negative_list_not_unsigned():
    p = CodeParameter("P", "-1:2")
    assert p.as_int_list() == [-1, 2]
    with pytest.raises(CodeParameterError):
        p.as_uint_list()


def test_string_parameter_quotes():
    p = CodeParameter("P", 'say "hi"', is_string=True)
    assert p.value == 'say "hi"'
    assert str(p) == 'P"say ""hi"""'


def test_unprecedented_letter_omitted():
    p = CodeParameter("@", "abc", is_string=True)
    assert str(p) == '"abc"'


def test_driver_ids():
    p = CodeParameter("P", "1.2:3", is_driver_id=True)
    drivers = p.as_driver_id_list()
    assert drivers == [DriverId(1, 2), DriverId(0, 3)]
    assert p.as_uint_list() == [d.as_uint64() for d in drivers]


def test_single_driver_id():
    p = CodeParameter("E", "2.4", is_driver_id=True)
    assert p.as_driver_id() == DriverId(2, 4)
    assert p.as_uint() == DriverId(2, 4).as_uint64()
    assert DriverId.from_uint64(p.as_uint()) == DriverId(2, 4)


def test_invalid_driver_id():
    with pytest.raises(CodeParameterError, match="Driver value is invalid from P parameter"):
        CodeParameter("P", "1.2.3", is_driver_id=True)


def test_convert_driver_ids_later():
    p = CodeParameter("E", "3")
    p.convert_driver_ids()
    assert p.is_driver_id
    assert p.as_driver_id() == DriverId(0, 3)


def test_as_bool():
    assert CodeParameter("S", "1").as_bool() is True
    assert CodeParameter("S", "false").as_bool() is False
    with pytest.raises(CodeParameterError):
        CodeParameter("S", "yes").as_bool()


def test_unsigned_beyond_signed_range():
    p = CodeParameter("S", BIG)
    assert p.as_uint() == int(BIG)
    with pytest.raises(CodeParameterError):
        p.as_int()
    assert p.as_driver_id() == DriverId.from_uint64(int(BIG))


def test_signed_int_is_not_driver_id():
    with pytest.raises(CodeParameterError):
        CodeParameter("S", "5").as_driver_id()


def test_negative_not_unsigned():
    with pytest.raises(CodeParameterError):
        CodeParameter("S", "-5").as_uint()


def test_overflowing_float_stays_text():
    p = CodeParameter("S", "1e400")
    assert p.value == "1e400"
    with pytest.raises(CodeParameterError):
        p.as_float()


def test_dict_round_trip():
    p = CodeParameter("P", "1.2:3", is_driver_id=True)
    q = CodeParameter.from_dict(p.to_dict())
    assert q.to_dict() == p.to_dict()
    assert q.as_driver_id_list() == p.as_driver_id_list()


def test_from_dict_numeric_flags():
    p = CodeParameter.from_dict({"letter": "S", "value": "12", "isString": 1, "isDriverId": 0})
    assert p.is_string
    assert not p.is_driver_id
    assert p.value == "12"


def test_simple_formats_values():
    assert CodeParameter.simple("X", 2.0).string_value == "2"
    assert CodeParameter.simple("X", 1e6).string_value == "1e+06"
    assert CodeParameter.simple("X", True).string_value == "true"
    assert CodeParameter.simple("X", 1.5).as_float() == 1.5


def test_simple_expression_string():
    p = CodeParameter.simple("S", "{a}")
    assert p.is_string and p.is_expression
    assert str(p) == "S{a}"


def test_clone_is_independent():
    p = CodeParameter("X", "5")
    c = p.clone()
    c.letter = "Y"
    assert p.letter == "X"
    assert c.as_int() == p.as_int()


def test_missing_parameter_error_message():
    assert str(MissingParameterError()) == "Parameter not found"
    assert issubclass(MissingParameterError, LookupError)