"""Error hierarchy tests — codes, statuses, and the REST envelope."""

from pokebin.core.errors import (
    DatabaseError, ErrorContext, LookupTableError, MalformedRecordError,
    PokebinError, RentalTooLongError, ResourceNotFoundError, StatValueError,
)


def test_codec_errors_are_pokebin_errors():
    assert isinstance(MalformedRecordError("bad"), PokebinError)
    assert isinstance(RentalTooLongError(300, 255), PokebinError)


def test_http_status_per_error():
    assert MalformedRecordError("bad").http_status == 500
    assert RentalTooLongError(300, 255).http_status == 400
    assert ResourceNotFoundError("Paste", "9").http_status == 404
    assert DatabaseError("down", "execute").http_status == 503
    assert LookupTableError("moves", "missing").http_status == 500


def test_stat_value_error_is_local_value_error():
    err = StatValueError("99999999999")
    assert isinstance(err, ValueError)
    assert not isinstance(err, PokebinError)
    assert err.digits == "99999999999"


def test_to_response_envelope():
    err = ResourceNotFoundError("Paste", "12", ErrorContext(paste_id=12))
    body = err.to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Paste '12' not found"
    assert body["category"] == "resource_not_found"
    assert body["severity"] == "error"
    assert body["context"]["paste_id"] == 12
    assert "timestamp" in body


def test_rental_error_message_names_sizes():
    err = RentalTooLongError(256, 255)
    assert "256" in err.message
    assert "255" in err.message
    assert err.code == "RENTAL_TOO_LONG"
