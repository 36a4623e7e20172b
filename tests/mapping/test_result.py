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
"""Tests for mapping results."""

from __future__ import annotations

import pytest

from dataformats.kernel.exceptions import MappingException
from dataformats.mapping.result import Absent, Failed, Mapped
from dataformats.mapping.values import UNDEFINED


class TestMapped:
    def test_value_access(self):
        result = Mapped(42)
        assert result.ok
        assert result.unwrap() == 42
        assert result.or_else(0) == 42
        assert result.collapse() == 42


class TestAbsent:
    def test_collapses_to_none(self):
        result = Absent()
        assert result.ok
        assert result.unwrap() is None
        assert result.or_else("fallback") == "fallback"
        assert result.collapse() is None


class TestFailed:
    def test_collapses_to_undefined(self):
        error = MappingException("field", "read", ValueError("bad"))
        result = Failed(error)
        assert not result.ok
        assert result.or_else("fallback") == "fallback"
        assert result.collapse() is UNDEFINED

    def test_unwrap_reraises_with_cause(self):
        cause = ValueError("bad")
        result = Failed(MappingException("field", "read", cause))
        with pytest.raises(MappingException) as info:
            result.unwrap()
        assert info.value.__cause__ is cause

    def test_results_are_frozen(self):
        with pytest.raises(AttributeError):
            Mapped(1).value = 2  # type: ignore[misc]
