# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for Mapper chain operations, applied to single fields."""

from __future__ import annotations

import math
from datetime import UTC, datetime
from types import SimpleNamespace

import pytest

from dataformats.core.settings import MappingSettings, set_settings
from dataformats.kernel.exceptions import FormatConfigurationException
from dataformats.mapping.entry import JsonValue, node, number, value
from dataformats.mapping.format import Format
from dataformats.mapping.mapper import Mapper, NumberMapper
from dataformats.mapping.values import UNDEFINED


class Foo:
    pass


FOO_FORMAT = Format(Foo, value("bar"))

OBJECTS = [{"id": "1", "title": "First object"}, {"id": "2", "title": "Second object"}]


def model(**attrs):
    return SimpleNamespace(**attrs)


class TestImmutability:
    def test_chain_returns_new_mapper(self):
        base = value("a")
        chained = base.transform(str.upper, str.lower)
        assert chained is not base
        assert base.read({"a": "x"}) == "x"
        assert chained.read({"a": "x"}) == "X"

    def test_mapper_is_frozen(self):
        mapper = value("a")
        with pytest.raises(AttributeError):
            mapper.name = "b"  # type: ignore[misc]

    def test_names_carry_through_chain(self):
        mapper = value("a").to("b").number().min(1)
        assert (mapper.name, mapper.model_name) == ("a", "b")


class TestTo:
    def test_renames_model_attribute(self):
        mapper = value("NOM").to("name")
        assert mapper.model_name == "name"
        assert mapper.read({"NOM": "x"}) == "x"
        assert mapper.write(model(name="y", NOM="z")) == "y"

    def test_keeps_variant(self):
        assert type(value("a").to("b")) is JsonValue
        assert type(value("a").number().to("b")) is NumberMapper

    def test_rejects_blank_name(self):
        with pytest.raises(FormatConfigurationException):
            value("a").to("")

    def test_after_readonly_still_never_writes(self):
        mapper = value("secret").readonly().to("hidden")
        assert mapper.read({"secret": "s"}) == "s"
        assert mapper.write(model(hidden="s", secret="s")) is UNDEFINED

    def test_after_raw_transform_keeps_write_absent(self):
        mapper = value("total").raw_transform(lambda j: j["a"] + j["b"]).to("sum")
        assert mapper.read({"a": 1, "b": 2}) == 3
        assert mapper.write is None

    def test_after_raw_transform_keeps_whole_model_write(self):
        mapper = value("full").raw_transform(lambda j: j["full"], lambda m: m.first + " " + m.last).to("name")
        assert mapper.write(model(first="Ada", last="Lovelace")) == "Ada Lovelace"

    def test_after_write_steps_reads_renamed_attribute(self):
        mapper = value("a").transform(str.upper, str.lower).to("b")
        assert mapper.write(model(a="IGNORED", b="LOUD")) == "loud"

    def test_after_array_of_writes_through_format(self):
        mapper = value("tags").array_of(FOO_FORMAT).to("labels")
        foos = mapper.read({"tags": [{"bar": "x"}]})
        assert [foo.bar for foo in foos] == ["x"]
        assert mapper.write(model(labels=foos)) == [{"bar": "x"}]

    def test_after_node_is_writes_through_format(self):
        mapper = node("foo").is_(FOO_FORMAT).to("main")
        foo = mapper.read({"foo": {"bar": "inner"}})
        assert mapper.model_name == "main"
        assert mapper.write(model(main=foo)) == {"bar": "inner"}


class TestDirection:
    def test_readonly_never_writes(self):
        mapper = value("a").readonly()
        assert mapper.read({"a": 1}) == 1
        assert mapper.write(model(a=1)) is UNDEFINED

    def test_writeonly_never_reads(self):
        mapper = value("a").writeonly()
        assert mapper.read({"a": 1}) is UNDEFINED
        assert mapper.write(model(a=1)) == 1

    def test_readonly_keeps_number_variant(self):
        assert isinstance(number("a").readonly(), NumberMapper)


class TestTransform:
    def test_composes_after_existing_functions(self):
        mapper = value("a").transform(lambda v: v + 1, lambda v: v * 10).transform(lambda v: v * 2, lambda v: v - 1)
        assert mapper.read({"a": 1}) == 4
        assert mapper.write(model(a=2)) == 19

    def test_write_step_defaults_to_identity(self):
        mapper = value("a").transform(str.upper)
        assert mapper.write(model(a="low")) == "low"

    def test_leaves_entry_stage(self):
        mapper = value("a").transform(str.upper)
        assert type(mapper) is Mapper
        assert not hasattr(mapper, "raw_transform")


class TestBoolean:
    @pytest.mark.parametrize("raw", [True, "true", "1", 1, 1.0])
    def test_true_inputs(self, raw):
        assert value("a").boolean().read({"a": raw}) is True

    @pytest.mark.parametrize("raw", [False, "false", "0", 0, None, "anything else", 2, "TRUE"])
    def test_false_inputs(self, raw):
        assert value("a").boolean().read({"a": raw}) is False

    def test_missing_is_false(self):
        assert value("a").boolean().read({}) is False

    def test_write_is_identity(self):
        assert value("a").boolean().write(model(a="whatever")) == "whatever"


class TestNumber:
    def test_coerces_strings(self):
        assert value("b").number().read({"b": "14"}) == 14

    def test_missing_is_nan(self):
        assert math.isnan(value("b").number().read({}))

    def test_min_then_max(self):
        mapper = number("b").min(5).max(10)
        assert mapper.read({"b": "14"}) == 10
        assert mapper.read({"b": "3"}) == 5
        assert mapper.read({"b": "7"}) == 7

    def test_max_then_min(self):
        mapper = number("b").max(10).min(5)
        assert mapper.read({"b": "14"}) == 10
        assert mapper.read({"b": "3"}) == 5

    def test_min_replaces_falsy_with_bound(self):
        assert number("b").min(5).read({"b": 0}) == 5
        assert number("b").min(5).read({}) == 5

    def test_max_replaces_falsy_with_bound(self):
        assert number("b").max(10).read({"b": ""}) == 10

    def test_abs(self):
        assert number("c").abs().read({"c": "-16"}) == 16
        assert number("c").abs().read({"c": 0}) == 0

    def test_refinements_stay_numeric(self):
        mapper = number("c").abs().min(1).max(2).transform(lambda v: v)
        assert isinstance(mapper, NumberMapper)

    def test_write_is_identity(self):
        assert number("b").min(5).max(10).write(model(b=42)) == 42


class TestDate:
    def test_reads_default_pattern(self):
        parsed = value("created").date().read({"created": "2016-02-03T10:20:30.123Z"})
        assert parsed == datetime(2016, 2, 3, 10, 20, 30, 123000, tzinfo=UTC)

    def test_reads_custom_pattern(self):
        assert value("d").date("DD/MM/YYYY").read({"d": "03/02/2016"}) == datetime(2016, 2, 3)

    def test_default_pattern_comes_from_settings(self):
        set_settings(MappingSettings(date_pattern="DD.MM.YYYY"))
        assert value("d").date().read({"d": "03.02.2016"}) == datetime(2016, 2, 3)

    def test_missing_is_undefined(self):
        assert value("d").date().read({}) is UNDEFINED

    def test_write_does_not_format(self):
        moment = datetime(2016, 2, 3)
        assert value("d").date().write(model(d=moment)) is moment


class TestArrayOf:
    def test_reads_each_element(self):
        foos = value("foos").array_of(FOO_FORMAT).read({"foos": [{"bar": "x"}, {"bar": "y"}]})
        assert [type(f) for f in foos] == [Foo, Foo]
        assert [f.bar for f in foos] == ["x", "y"]

    def test_writes_each_element(self):
        first, second = Foo(), Foo()
        first.bar, second.bar = "x", "y"
        assert value("foos").array_of(FOO_FORMAT).write(model(foos=[first, second])) == [{"bar": "x"}, {"bar": "y"}]

    @pytest.mark.parametrize("raw", ["nope", {"bar": "x"}, None, 3])
    def test_non_array_is_undefined(self, raw):
        mapper = value("foos").array_of(FOO_FORMAT)
        assert mapper.read({"foos": raw}) is UNDEFINED
        assert mapper.write(model(foos=raw)) is UNDEFINED

    def test_rejects_invalid_format(self):
        with pytest.raises(FormatConfigurationException):
            value("foos").array_of(object())


class TestDefaultsTo:
    @pytest.mark.parametrize("raw", [UNDEFINED, None, 0, "", False])
    def test_falsy_replaced_on_read(self, raw):
        source = {} if raw is UNDEFINED else {"a": raw}
        assert value("a").defaults_to("fallback").read(source) == "fallback"

    @pytest.mark.parametrize("raw", [None, 0, "", False])
    def test_falsy_replaced_on_write(self, raw):
        assert value("a").defaults_to("fallback").write(model(a=raw)) == "fallback"

    def test_missing_attribute_replaced_on_write(self):
        assert value("a").defaults_to("fallback").write(model()) == "fallback"

    def test_truthy_kept(self):
        assert value("a").defaults_to("fallback").read({"a": "set"}) == "set"
        assert value("a").defaults_to([]).read({"a": []}) == []


class TestIdResolver:
    def test_read_finds_element(self):
        assert value("ref").id_resolver(OBJECTS).read({"ref": "2"}) is OBJECTS[1]

    def test_read_without_match_is_undefined(self):
        assert value("ref").id_resolver(OBJECTS).read({"ref": "3"}) is UNDEFINED
        assert value("ref").id_resolver(OBJECTS).read({}) is UNDEFINED

    def test_write_returns_id(self):
        assert value("ref").id_resolver(OBJECTS).write(model(ref=OBJECTS[1])) == "2"

    def test_write_of_falsy_is_none(self):
        assert value("ref").id_resolver(OBJECTS).write(model(ref=None)) is None
        assert value("ref").id_resolver(OBJECTS).write(model()) is None

    def test_custom_id_field_and_objects(self):
        people = [SimpleNamespace(key=7, name="Ada")]
        mapper = value("owner").id_resolver(people, id_field="key")
        assert mapper.read({"owner": 7}) is people[0]
        assert mapper.write(model(owner=people[0])) == 7

    def test_first_match_wins(self):
        twins = [{"id": "1", "n": 1}, {"id": "1", "n": 2}]
        assert value("ref").id_resolver(twins).read({"ref": "1"})["n"] == 1


class TestEntryPoints:
    def test_value_reads_and_writes_same_name(self):
        mapper = value("a")
        assert isinstance(mapper, JsonValue)
        assert mapper.read({"a": 1}) == 1
        assert mapper.write(model(a=2)) == 2

    @pytest.mark.parametrize("name", ["", "  ", None, 3])
    def test_value_rejects_bad_names(self, name):
        with pytest.raises(FormatConfigurationException):
            value(name)

    def test_raw_transform_sees_whole_source(self):
        mapper = value("sum").raw_transform(lambda j: int(j["b"]) + int(j["c"]))
        assert mapper.read({"b": "14", "c": "-16"}) == -2
        assert mapper.write is None

    def test_raw_transform_with_write(self):
        mapper = value("full").raw_transform(
            lambda j: f"{j['first']} {j['last']}",
            lambda m: m.full.upper(),
        )
        assert mapper.write(model(full="ada lovelace")) == "ADA LOVELACE"

    def test_transform_after_raw_transform_keeps_write_absent(self):
        mapper = value("sum").raw_transform(lambda j: 1).transform(lambda v: v + 1)
        assert mapper.read({}) == 2
        assert mapper.write is None

    def test_node_is_delegates_to_format(self):
        mapper = node("foo").is_(FOO_FORMAT)
        foo = mapper.read({"foo": {"bar": "inner"}})
        assert isinstance(foo, Foo) and foo.bar == "inner"
        assert mapper.write(model(foo=foo)) == {"bar": "inner"}

    @pytest.mark.parametrize("fmt", [None, object(), Format, SimpleNamespace(read=1, write=2)])
    def test_node_is_rejects_invalid_format(self, fmt):
        with pytest.raises(FormatConfigurationException):
            node("foo").is_(fmt)
