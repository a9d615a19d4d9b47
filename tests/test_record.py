import pytest

from zone_records.errors import RDataSyntaxError, RecordSyntaxError
from zone_records.record import RecordTokenizer, tokenize
from zone_records.records import ParseContext
from zone_records.stream import StringStream

PREVIOUS = "example.com."
TTL = "3600"

BOTH = ParseContext(previous_name=PREVIOUS, global_ttl=TTL)
NAME_ONLY = ParseContext(previous_name=PREVIOUS)
TTL_ONLY = ParseContext(global_ttl=TTL)
NEITHER = ParseContext()
FIRST = ParseContext(is_first=True, previous_name=PREVIOUS, global_ttl=TTL)


def parse(text, context):
    return tokenize(StringStream(text), context)


@pytest.mark.parametrize("context", [BOTH, NAME_ONLY, TTL_ONLY, NEITHER, FIRST])
def test_explicit_fields_are_kept_verbatim(context):
    fields = parse("www.example.org. 7200 IN A 192.0.2.1", context)
    assert fields.name == "www.example.org."
    assert fields.ttl == "7200"
    assert fields.rtype == "A"
    assert str(fields.rdata) == "192.0.2.1"


def test_leading_class_marker_inherits_name_and_ttl():
    fields = parse("IN MX 10 mail.example.com.", BOTH)
    assert fields.as_dict()["NAME"] == "example.com."
    assert fields.as_dict()["TTL"] == "3600"
    assert fields.as_dict()["TYPE"] == "MX"
    assert str(fields.as_dict()["RDATA"]) == "10 mail.example.com."


@pytest.mark.parametrize("context", [NAME_ONLY, TTL_ONLY, NEITHER])
def test_leading_class_marker_needs_both_defaults(context):
    with pytest.raises(RecordSyntaxError):
        parse("IN MX 10 mail.example.com.", context)


def test_single_word_before_class_is_name_when_ttl_is_known():
    fields = parse("www IN A 192.0.2.1", TTL_ONLY)
    assert (fields.name, fields.ttl, fields.rtype) == ("www", TTL, "A")


def test_single_word_before_class_is_ttl_without_zone_ttl():
    fields = parse("7200 IN A 192.0.2.1", NAME_ONLY)
    assert (fields.name, fields.ttl, fields.rtype) == (PREVIOUS, "7200", "A")


def test_single_word_before_class_prefers_name_when_both_known():
    fields = parse("www IN A 192.0.2.1", BOTH)
    assert (fields.name, fields.ttl) == ("www", TTL)


def test_single_word_before_class_without_defaults_fails():
    with pytest.raises(RecordSyntaxError):
        parse("www IN A 192.0.2.1", NEITHER)


def test_type_only_record_rewinds_to_data():
    stream = StringStream("A 192.0.2.1\nnext line")
    fields = tokenize(stream, BOTH)
    assert (fields.name, fields.ttl, fields.rtype) == (PREVIOUS, TTL, "A")
    assert str(fields.rdata) == "192.0.2.1"
    assert stream.current() == "\n"


def test_type_only_record_rewinds_multi_word_data():
    fields = parse("MX   10 mail.example.com.", BOTH)
    assert fields.rtype == "MX"
    assert str(fields.rdata) == "10 mail.example.com."


@pytest.mark.parametrize("context", [NAME_ONLY, TTL_ONLY, NEITHER])
def test_type_only_record_needs_both_defaults(context):
    with pytest.raises(RecordSyntaxError):
        parse("A 192.0.2.1", context)


@pytest.mark.parametrize("text", ["A 192.0.2.1", "www A 192.0.2.1", "3600 A 192.0.2.1"])
def test_first_record_never_inherits(text):
    with pytest.raises(RecordSyntaxError) as exc:
        parse(text, FIRST)
    assert not isinstance(exc.value, RDataSyntaxError)


def test_first_record_without_default_fails_on_leading_class():
    with pytest.raises(RecordSyntaxError):
        parse("IN A 192.0.2.1", ParseContext(is_first=True))


def test_name_and_type_keep_name_with_zone_ttl():
    fields = parse("www A 192.0.2.1", BOTH)
    assert (fields.name, fields.ttl, fields.rtype) == ("www", TTL, "A")
    assert str(fields.rdata) == "192.0.2.1"


def test_name_and_type_without_previous_name_keep_name():
    fields = parse("www A 192.0.2.1", TTL_ONLY)
    assert (fields.name, fields.ttl, fields.rtype) == ("www", TTL, "A")


def test_ttl_and_type_inherit_previous_name():
    fields = parse("7200 A 192.0.2.1", NAME_ONLY)
    assert (fields.name, fields.ttl, fields.rtype) == (PREVIOUS, "7200", "A")


def test_word_and_type_without_defaults_fails():
    with pytest.raises(RecordSyntaxError):
        parse("www A 192.0.2.1", NEITHER)


def test_two_type_keywords_take_the_first_as_type():
    fields = parse("TXT A", BOTH)
    assert (fields.name, fields.ttl, fields.rtype) == (PREVIOUS, TTL, "TXT")
    assert "A" in fields.rdata.toZone()


@pytest.mark.parametrize("context", [NAME_ONLY, TTL_ONLY])
def test_two_type_keywords_need_both_defaults(context):
    with pytest.raises(RecordSyntaxError):
        parse("MX MX 10 mail.example.com.", context)


@pytest.mark.parametrize("text", ["www 3600 192.0.2.1", "www 3600", "www"])
def test_no_type_and_no_class_fails(text):
    with pytest.raises(RecordSyntaxError) as exc:
        parse(text, BOTH)
    assert not isinstance(exc.value, RDataSyntaxError)


def test_empty_record_fails():
    with pytest.raises(RecordSyntaxError):
        parse("\n", BOTH)


def test_missing_type_after_class_fails():
    with pytest.raises(RecordSyntaxError):
        parse("www 3600 IN \n", BOTH)


def test_class_prefix_in_a_name_is_not_a_class_marker():
    fields = parse("INSIDE 3600 IN A 192.0.2.1", NEITHER)
    assert fields.name == "INSIDE"


def test_rdata_errors_propagate():
    with pytest.raises(RDataSyntaxError):
        parse("www 3600 IN A not-an-ip", NEITHER)
    with pytest.raises(RDataSyntaxError):
        parse("www 3600 IN BOGUS data", NEITHER)


def test_error_reports_position():
    stream = StringStream("x 1 IN A 192.0.2.1\nwww 3600 192.0.2.1\n")
    stream.reset(19)
    with pytest.raises(RecordSyntaxError) as exc:
        tokenize(stream, BOTH)
    assert exc.value.line == 2
    assert exc.value.column > 1
    assert "line 2" in str(exc.value)


@pytest.mark.parametrize(
    "text, found",
    [("IN A", True), ("IN\tA", True), ("INA", False), ("IX", False), ("I", False), ("IN", False)],
)
def test_class_marker_check_restores_cursor(text, found):
    stream = StringStream(text)
    assert RecordTokenizer(stream, NEITHER)._peek_class_marker() is found
    assert stream.position == 0


def test_names_are_made_absolute_with_origin():
    context = ParseContext(global_origin="example.com.")
    fields = parse("www 3600 IN A 192.0.2.1", context)
    assert fields.name == "www.example.com."


def test_names_are_made_relative_with_origin():
    context = ParseContext(global_origin="example.com.", relative_to_origin=True)
    assert parse("www.example.com. 3600 IN A 192.0.2.1", context).name == "www"
    assert parse("example.com. 3600 IN A 192.0.2.1", context).name == "@"


def test_relative_names_in_data_use_origin():
    context = ParseContext(global_origin="example.com.")
    fields = parse("@ 3600 IN CNAME www", context)
    assert str(fields.rdata) == "www.example.com."
