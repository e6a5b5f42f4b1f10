from __future__ import annotations

import json
import pickle
import threading

import ldtkjson
import pytest

from ldtkjson.errors import LdtkDecodeError

from tests.payloads import level_payload


def test_public_api_exposes_version() -> None:
    assert isinstance(ldtkjson.__version__, str)


def test_public_api_all_contains_core_exports() -> None:
    exported = set(ldtkjson.__all__)
    assert "load_project" in exported
    assert "load_level" in exported
    assert "decode_field_instance" in exported
    assert "__version__" in exported
    for name in ldtkjson.__all__:
        assert hasattr(ldtkjson, name)


def test_decode_errors_share_one_base() -> None:
    for error_type in (
        ldtkjson.DuplicateFieldError,
        ldtkjson.MissingFieldError,
        ldtkjson.UnknownFieldTypeError,
        ldtkjson.MalformedColorError,
        ldtkjson.TypeMismatchError,
    ):
        assert issubclass(error_type, LdtkDecodeError)
        assert issubclass(error_type, ldtkjson.LdtkError)


def test_load_level_rejects_non_object_document() -> None:
    with pytest.raises(LdtkDecodeError, match="Expected object"):
        ldtkjson.load_level("[1, 2]")


def test_decoding_in_threads_keeps_paths_separate() -> None:
    good = json.dumps(level_payload())
    bad = json.dumps(level_payload(pxWid="wide"))
    results: dict = {}

    def run(name: str, text: str) -> None:
        try:
            results[name] = ldtkjson.load_level(text)
        except LdtkDecodeError as exc:
            results[name] = exc

    threads = [
        threading.Thread(target=run, args=(f"{name}{index}", text))
        for index in range(4)
        for name, text in (("good", good), ("bad", bad))
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    for index in range(4):
        assert isinstance(results[f"good{index}"], ldtkjson.Level)
        assert results[f"bad{index}"].path == "pxWid"


def test_decode_errors_survive_pickling() -> None:
    errors = [
        ldtkjson.DuplicateFieldError("__type"),
        ldtkjson.MissingFieldError("__value"),
        ldtkjson.UnknownFieldTypeError("Bogus"),
        ldtkjson.MalformedColorError("#zz"),
        ldtkjson.TypeMismatchError("integer", "x"),
        LdtkDecodeError("bad", path="levels[0]"),
    ]
    for error in errors:
        restored = pickle.loads(pickle.dumps(error))
        assert type(restored) is type(error)
        assert str(restored) == str(error)
        assert restored.__dict__ == error.__dict__


def test_pickled_error_keeps_its_location() -> None:
    with pytest.raises(LdtkDecodeError) as caught:
        ldtkjson.load_level(json.dumps(level_payload(pxWid="wide")))
    restored = pickle.loads(pickle.dumps(caught.value))
    assert isinstance(restored, ldtkjson.TypeMismatchError)
    assert restored.path == "pxWid"
    assert restored.actual == "wide"
    assert "Location: pxWid" in str(restored)
