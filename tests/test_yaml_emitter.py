"""Tests for canonical YAML output of a ParameterStore."""

import math
import os
import stat

import pytest

from paramstore import (
    EmitterOptions,
    ParameterEmitter,
    ParameterStore,
    ParameterType,
    UnsupportedTypeError,
    read_parameters_from_file,
    read_parameters_from_string,
    write_parameters_to_file,
    write_parameters_to_string,
)
from paramstore.yaml_io.scalars import format_double, is_plain_string


def reread(text: str) -> ParameterStore:
    store = ParameterStore()
    assert read_parameters_from_string(text, store)
    return store


def file_mode(path) -> int:
    return stat.S_IMODE(os.stat(path).st_mode)


class TestCanonicalText:
    """Test the exact text written for a store."""

    def test_end_to_end(self, store):
        """A read document is written back in canonical block form."""
        assert read_parameters_from_string('{a: {b: 1, c: [true,false]}, d: "x"}', store)

        assert write_parameters_to_string(store) == "a:\n    b: 1\n    c: [true, false]\nd: x\n"

    def test_sorted_nesting(self, store):
        """Names are written in sorted order, each map opened once."""
        store.set("b/x", 1)
        store.set("a/y", 2)
        store.set("a/x", 3)

        assert write_parameters_to_string(store) == "a:\n    x: 3\n    y: 2\nb:\n    x: 1\n"

    def test_deep_paths_close_and_reopen(self, store):
        """Only the maps that differ from the previous name are closed."""
        store.set("a/b/c/d", 1)
        store.set("a/b/e", 2)
        store.set("a/f/g", 3)
        store.set("h", 4)

        assert write_parameters_to_string(store) == (
            "a:\n"
            "    b:\n"
            "        c:\n"
            "            d: 1\n"
            "        e: 2\n"
            "    f:\n"
            "        g: 3\n"
            "h: 4\n"
        )

    def test_empty_store(self, store):
        """An empty store is an empty map."""
        assert write_parameters_to_string(store) == "{}\n"

    def test_integral_double_keeps_fraction(self, store):
        """Integral doubles are written with '.0'."""
        store.set("d", 4.0)
        store.set("v", [1.0, 0.25])

        assert write_parameters_to_string(store) == "d: 4.0\nv: [1.0, 0.25]\n"

    def test_strings_that_look_typed_are_quoted(self, store):
        """Strings that would read back as another type are quoted."""
        store.set("number", "42")
        store.set("flag", "true")
        store.set("empty", "")
        store.set("plain", "hello world")
        store.set("names", ["7", "x"])

        text = write_parameters_to_string(store)

        assert "number: '42'\n" in text
        assert "flag: 'true'\n" in text
        assert "empty: ''\n" in text
        assert "plain: hello world\n" in text
        assert "names: ['7', x]\n" in text

    def test_empty_vectors(self, store):
        """Empty vectors are written as []."""
        store.set("ints", [])
        store.set("strings", [], kind=ParameterType.STRING_VECTOR)

        assert write_parameters_to_string(store) == "ints: []\nstrings: []\n"

    def test_block_sequence_option(self, store):
        """flow_sequences=False writes block sequences that read back."""
        store.set("v", [1, 2])
        options = EmitterOptions(indent=2, flow_sequences=False)

        text = write_parameters_to_string(store, options)

        assert text == "v:\n- 1\n- 2\n"
        assert reread(text).get("v", list[int]) == [1, 2]

    def test_options_are_validated(self):
        """Out-of-range options are rejected."""
        with pytest.raises(ValueError):
            EmitterOptions(indent=1)


class TestFormatDouble:
    """Test the canonical text of doubles."""

    @pytest.mark.parametrize(
        "value, text",
        [
            (4.0, "4.0"),
            (-3.0, "-3.0"),
            (0.1, "0.1"),
            (-0.123456789, "-0.123456789"),
            (1e20, "1e+20"),
            (1.5e-07, "1.5e-07"),
            (math.inf, ".inf"),
            (-math.inf, "-.inf"),
            (math.nan, ".nan"),
        ],
    )
    def test_format(self, value, text):
        """Each double has exactly one text form."""
        assert format_double(value) == text

    def test_is_plain_string(self):
        """Only text that reads back as a string may be written plain."""
        assert is_plain_string("apple")
        assert not is_plain_string("1.5")
        assert not is_plain_string("no")
        assert not is_plain_string("~")


class TestRoundTrip:
    """Test that written text reads back as the same store."""

    def test_values_survive(self, mixed_store):
        """Every name, type and value survives a write and read."""
        text = write_parameters_to_string(mixed_store)
        store = reread(text)

        assert store.names() == mixed_store.names()
        for name, parameter in mixed_store.items():
            assert store.type_of(name) is parameter.kind, name
            assert store.get(name) == mixed_store.get(name), name

    def test_integral_double_stays_double(self, store):
        """Integral doubles do not read back as ints."""
        store.set("d", 4.0)
        store.set("big", 1e20)

        reread_store = reread(write_parameters_to_string(store))

        assert reread_store.type_of("d") is ParameterType.DOUBLE
        assert reread_store.type_of("big") is ParameterType.DOUBLE
        assert reread_store.get("big") == 1e20

    def test_special_doubles(self, store):
        """Infinities, NaN and tiny values survive."""
        store.set("values", [math.inf, -math.inf, 1e-300])
        store.set("nan", math.nan)

        reread_store = reread(write_parameters_to_string(store))

        assert reread_store.get("values", list[float]) == [math.inf, -math.inf, 1e-300]
        assert math.isnan(reread_store.get("nan", float))

    def test_serialization_is_idempotent(self, mixed_store):
        """Writing a re-read store gives the same text."""
        first = write_parameters_to_string(mixed_store)
        second = write_parameters_to_string(reread(first))

        assert first == second

    def test_unicode_strings(self, store):
        """Non-ASCII strings are written unescaped."""
        store.set("greeting", "grüße")

        text = write_parameters_to_string(store)

        assert text == "greeting: grüße\n"
        assert reread(text).get("greeting", str) == "grüße"


class TestUnwritableValues:
    """Test values that have no text form."""

    def test_integer_over_digit_limit(self, store):
        """An int too long to format makes the string writer return None."""
        store.set("n", 10**5000)

        assert write_parameters_to_string(store) is None

    def test_integer_over_digit_limit_in_vector(self, store):
        """The emitter raises UnsupportedTypeError for such an element."""
        store.set("v", [1, 10**5000])

        with pytest.raises(UnsupportedTypeError):
            ParameterEmitter().emit(store)

    def test_file_is_left_untouched(self, store, tmp_path):
        """A failed write keeps the previous file contents."""
        target = tmp_path / "params.yaml"
        target.write_text("old: 1\n")
        store.set("n", 10**5000)

        assert not write_parameters_to_file(target, store)
        assert target.read_text() == "old: 1\n"


class TestWriteFile:
    """Test writing parameter files."""

    def test_write_file(self, data_dir, tmp_path):
        """Writing a read file gives the expected canonical file, twice over."""
        store = ParameterStore()
        assert read_parameters_from_file(data_dir / "random_order.yaml", store)

        first = tmp_path / "first.yaml"
        assert write_parameters_to_file(first, store)
        expected = (data_dir / "expected_result_ordered.yaml").read_text()
        assert first.read_text() == expected

        # re-read the written file and write it again
        reread_store = ParameterStore()
        assert read_parameters_from_file(first, reread_store)
        second = tmp_path / "second.yaml"
        assert write_parameters_to_file(second, reread_store)
        assert second.read_text() == expected

    def test_overwrites_existing_file(self, mixed_store, tmp_path):
        """An existing file is replaced with no temporary file left behind."""
        target = tmp_path / "params.yaml"
        target.write_text("old: 1\n")

        assert write_parameters_to_file(str(target), mixed_store)

        assert target.read_text() == write_parameters_to_string(mixed_store)
        assert [p.name for p in tmp_path.iterdir()] == ["params.yaml"]

    @pytest.mark.parametrize("mode", [0o644, 0o640, 0o600])
    def test_existing_file_keeps_its_mode(self, mixed_store, tmp_path, mode):
        """Overwriting a file keeps its permission bits."""
        target = tmp_path / "params.yaml"
        target.write_text("old: 1\n")
        os.chmod(target, mode)

        assert write_parameters_to_file(target, mixed_store)

        assert file_mode(target) == mode

    def test_new_file_follows_umask(self, mixed_store, tmp_path):
        """A new file gets the default mode for the process umask."""
        target = tmp_path / "params.yaml"
        previous = os.umask(0o022)
        try:
            assert write_parameters_to_file(target, mixed_store)
        finally:
            os.umask(previous)

        assert file_mode(target) == 0o644

    def test_missing_directory(self, mixed_store, tmp_path):
        """A write into a missing directory fails."""
        assert not write_parameters_to_file(tmp_path / "missing" / "params.yaml", mixed_store)

    def test_emitter_raises_on_missing_directory(self, mixed_store, tmp_path):
        """ParameterEmitter.write() lets the OSError through."""
        with pytest.raises(OSError):
            ParameterEmitter().write(mixed_store, tmp_path / "missing" / "params.yaml")
