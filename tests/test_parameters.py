from __future__ import annotations

import unittest
from collections import namedtuple
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Optional

from dynamic_orm import NamedParameter, ParameterBuilder, bind_parameters
from dynamic_orm.core.parameters import public_attribute_names


@dataclass
class PersonParams:
    Name: str = ""
    LastLogin: Optional[datetime] = None
    _audit: str = field(default="internal", repr=False)
    table: ClassVar[str] = "People"


class PlainPerson:
    kind = "class-level"

    def __init__(self, name: str, age: int):
        self.Name = name
        self.Age = age
        self._secret = "hidden"

    @property
    def Display(self) -> str:
        return f"{self.Name} ({self.Age})"

    @property
    def _private_display(self) -> str:
        return "hidden"

    @staticmethod
    def helper() -> str:
        return "static"

    def greet(self) -> str:
        return f"hi {self.Name}"


class SlottedPerson:
    __slots__ = ("Name", "_token")

    def __init__(self, name: str):
        self.Name = name
        self._token = "t"


class CountingProperty:
    def __init__(self) -> None:
        self._reads = 0

    @property
    def Value(self) -> int:
        self._reads += 1
        return self._reads


PersonTuple = namedtuple("PersonTuple", ["Name", "Age"])


class BindParametersTests(unittest.TestCase):
    def test_none_yields_empty_parameter_set(self) -> None:
        self.assertEqual(bind_parameters(None), ())

    def test_mapping_keeps_insertion_order(self) -> None:
        params = bind_parameters({"Name": "Dave", "Age": 42})
        self.assertEqual(
            params, (NamedParameter("Name", "Dave"), NamedParameter("Age", 42))
        )

    def test_mapping_with_non_string_key_raises(self) -> None:
        with self.assertRaises(TypeError):
            bind_parameters({1: "x"})

    def test_dataclass_fields_exclude_private_and_classvar(self) -> None:
        login = datetime(2024, 1, 2, 3, 4, 5)
        params = bind_parameters(PersonParams(Name="Dave", LastLogin=login))
        self.assertEqual(
            params,
            (NamedParameter("Name", "Dave"), NamedParameter("LastLogin", login)),
        )

    def test_plain_object_reads_instance_attributes_and_properties(self) -> None:
        params = bind_parameters(PlainPerson("Dave", 42))
        self.assertEqual(
            [(p.name, p.value) for p in params],
            [("Name", "Dave"), ("Age", 42), ("Display", "Dave (42)")],
        )

    def test_plain_object_excludes_static_class_and_method_members(self) -> None:
        names = public_attribute_names(PlainPerson("Dave", 42))
        self.assertNotIn("kind", names)
        self.assertNotIn("helper", names)
        self.assertNotIn("greet", names)
        self.assertNotIn("_secret", names)
        self.assertNotIn("_private_display", names)

    def test_slotted_object_reads_public_slots(self) -> None:
        params = bind_parameters(SlottedPerson("Dave"))
        self.assertEqual(params, (NamedParameter("Name", "Dave"),))

    def test_named_tuple_uses_field_order(self) -> None:
        params = bind_parameters(PersonTuple("Dave", 42))
        self.assertEqual([p.name for p in params], ["Name", "Age"])

    def test_values_are_read_once_at_bind_time(self) -> None:
        obj = CountingProperty()
        params = bind_parameters(obj)
        self.assertEqual(params, (NamedParameter("Value", 1),))
        obj._reads = 10
        self.assertEqual(params[0].value, 1)

    def test_values_are_passed_through_without_coercion(self) -> None:
        payload = object()
        params = bind_parameters({"Blob": payload})
        self.assertIs(params[0].value, payload)

    def test_identical_objects_produce_equal_parameter_sets(self) -> None:
        first = bind_parameters(PlainPerson("Dave", 42))
        second = bind_parameters(PlainPerson("Dave", 42))
        self.assertEqual(set(first), set(second))

    def test_scalar_and_plain_sequence_inputs_raise(self) -> None:
        for value in ("Dave", 42, 1.5, b"raw", True, ["Dave"], ("Dave",)):
            with self.subTest(value=value):
                with self.assertRaises(TypeError):
                    bind_parameters(value)

    def test_builder_output_passes_through(self) -> None:
        params = ParameterBuilder().with_parameter("Name", "Dave").build()
        self.assertEqual(bind_parameters(params), (NamedParameter("Name", "Dave"),))

    def test_duplicate_named_parameters_raise(self) -> None:
        with self.assertRaises(ValueError):
            bind_parameters([NamedParameter("Name", "a"), NamedParameter("Name", "b")])


class ParameterBuilderTests(unittest.TestCase):
    def test_with_parameter_chains_in_order(self) -> None:
        builder = ParameterBuilder().with_parameter("Name", "Dave").with_parameter("Age", None)
        self.assertEqual(len(builder), 2)
        self.assertEqual(
            builder.build(),
            (NamedParameter("Name", "Dave"), NamedParameter("Age", None)),
        )

    def test_duplicate_name_raises(self) -> None:
        builder = ParameterBuilder().with_parameter("Name", "Dave")
        with self.assertRaises(ValueError):
            builder.with_parameter("Name", "Eve")

    def test_empty_name_raises(self) -> None:
        with self.assertRaises(TypeError):
            ParameterBuilder().with_parameter("", 1)


if __name__ == "__main__":
    unittest.main()
