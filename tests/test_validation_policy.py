"""Tests for ValidationPolicy operations consulted by the validator."""
from __future__ import annotations

import threading
import time
from typing import List

import pytest

from openapi_schema_policy import (
    SchemaError,
    SchemaRef,
    ValidationPolicy,
    defaults_set,
    new_validation_policy,
    set_customize_schema_resolve,
    set_schema_error_message_customizer,
)

PET_REF = "#/components/schemas/Pet"
PET_SCHEMA = {"type": "object", "properties": {"name": {"type": "string"}}}


class CountingResolver:
    """Resolver stub that records every reference it is asked for."""

    def __init__(self, result=PET_SCHEMA):
        self.result = result
        self.calls: List[str] = []

    def __call__(self, ref: str):
        self.calls.append(ref)
        return self.result


class TestResolveSchema:
    def test_without_resolver_reference_only_value_is_unresolved(self) -> None:
        policy = new_validation_policy()

        assert policy.resolve_schema(SchemaRef(ref=PET_REF)) is None

    def test_without_resolver_embedded_schema_is_returned(self) -> None:
        policy = new_validation_policy()

        assert policy.resolve_schema(SchemaRef(ref=PET_REF, value=PET_SCHEMA)) is PET_SCHEMA

    def test_resolver_supplies_schema_for_reference(self) -> None:
        resolver = CountingResolver()
        policy = new_validation_policy(set_customize_schema_resolve(resolver))

        assert policy.resolve_schema(SchemaRef(ref=PET_REF)) is PET_SCHEMA
        assert resolver.calls == [PET_REF]

    def test_embedded_schema_never_consults_resolver(self) -> None:
        resolver = CountingResolver(result={"type": "string"})
        policy = new_validation_policy(set_customize_schema_resolve(resolver))
        embedded = {"type": "integer"}

        assert policy.resolve_schema(SchemaRef(ref=PET_REF, value=embedded)) is embedded
        assert policy.resolve_schema(SchemaRef(value=embedded)) is embedded
        assert resolver.calls == []

    def test_empty_embedded_mapping_counts_as_present(self) -> None:
        resolver = CountingResolver()
        policy = new_validation_policy(set_customize_schema_resolve(resolver))
        permissive = {}

        assert policy.resolve_schema(SchemaRef(ref=PET_REF, value=permissive)) is permissive
        assert resolver.calls == []

    def test_empty_reference_never_consults_resolver(self) -> None:
        resolver = CountingResolver()
        policy = new_validation_policy(set_customize_schema_resolve(resolver))

        assert policy.resolve_schema(SchemaRef()) is None
        assert resolver.calls == []

    def test_resolver_returning_nothing_stays_unresolved(self) -> None:
        resolver = CountingResolver(result=None)
        policy = new_validation_policy(set_customize_schema_resolve(resolver))

        assert policy.resolve_schema(SchemaRef(ref="#/components/schemas/Missing")) is None
        assert resolver.calls == ["#/components/schemas/Missing"]


class TestNotifyDefaultsApplied:
    def test_callback_runs_once_for_repeated_notifications(self) -> None:
        calls = []
        policy = new_validation_policy(defaults_set(lambda: calls.append(1)))

        policy.notify_defaults_applied()
        policy.notify_defaults_applied()
        policy.notify_defaults_applied()

        assert calls == [1]
        assert policy.defaults_applied is True

    def test_no_callback_is_a_no_op(self) -> None:
        policy = new_validation_policy()

        policy.notify_defaults_applied()

        assert policy.defaults_applied is False

    def test_latch_survives_reuse_across_traversals(self) -> None:
        calls = []
        policy = new_validation_policy(defaults_set(lambda: calls.append(1)))

        for _ in range(5):
            # each iteration stands in for a separate traversal
            policy.notify_defaults_applied()
            policy.notify_defaults_applied()

        assert len(calls) == 1

    def test_derived_policy_has_its_own_latch(self) -> None:
        calls = []
        policy = new_validation_policy(defaults_set(lambda: calls.append(1)))
        policy.notify_defaults_applied()

        derived = policy.with_options()
        derived.notify_defaults_applied()

        assert len(calls) == 2
        assert derived == policy

    def test_concurrent_notifications_fire_exactly_once(self) -> None:
        workers = 64
        counter = {"calls": 0}
        barrier = threading.Barrier(workers)

        def on_defaults() -> None:
            current = counter["calls"]
            # widen the window for a racing second execution
            time.sleep(0.01)
            counter["calls"] = current + 1

        policy = new_validation_policy(defaults_set(on_defaults))

        def worker() -> None:
            barrier.wait()
            policy.notify_defaults_applied()

        threads = [threading.Thread(target=worker) for _ in range(workers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert counter["calls"] == 1

    def test_late_callers_wait_for_running_callback(self) -> None:
        started = threading.Event()
        release = threading.Event()
        finished = []

        def on_defaults() -> None:
            started.set()
            release.wait(timeout=5)
            finished.append(True)

        policy = new_validation_policy(defaults_set(on_defaults))
        first = threading.Thread(target=policy.notify_defaults_applied)
        first.start()
        started.wait(timeout=5)

        second_done = threading.Event()

        def second_caller() -> None:
            policy.notify_defaults_applied()
            second_done.set()

        second = threading.Thread(target=second_caller)
        second.start()
        assert not second_done.wait(timeout=0.05)

        release.set()
        first.join()
        second.join()

        assert finished == [True]
        assert second_done.is_set()

    def test_failing_callback_still_counts_as_fired(self) -> None:
        calls = []

        def on_defaults() -> None:
            calls.append(1)
            raise RuntimeError("callback failed")

        policy = new_validation_policy(defaults_set(on_defaults))

        with pytest.raises(RuntimeError):
            policy.notify_defaults_applied()
        policy.notify_defaults_applied()

        assert calls == [1]


class TestFormatErrorMessage:
    def _errors(self):
        silent = SchemaError(reason="value must be a string", reversed_path=["name", 0, "pets"])
        loud = SchemaError(reason="value must be an integer", schema_field="type")
        return silent, loud

    def test_default_message_without_customizer(self) -> None:
        silent, _ = self._errors()
        policy = new_validation_policy()

        assert policy.format_error_message(silent) == 'Error at "/pets/0/name": value must be a string'

    def test_empty_customizer_result_falls_back_to_default(self) -> None:
        silent, loud = self._errors()

        def customizer(err: SchemaError) -> str:
            if err is silent:
                return ""
            return f"custom: {err.reason}"

        policy = new_validation_policy(set_schema_error_message_customizer(customizer))

        assert policy.format_error_message(silent) == silent.default_message()
        assert policy.format_error_message(loud) == "custom: value must be an integer"

    def test_bound_error_renders_through_customizer(self) -> None:
        _, loud = self._errors()
        policy = new_validation_policy(
            set_schema_error_message_customizer(lambda err: f"[{err.schema_field}] {err.reason}")
        )

        bound = policy.bind_error(loud)

        assert bound is loud
        assert str(loud) == "[type] value must be an integer"
        assert str(loud) == policy.format_error_message(loud)

    def test_binding_without_customizer_keeps_default(self) -> None:
        silent, _ = self._errors()

        new_validation_policy().bind_error(silent)

        assert str(silent) == silent.default_message()


class TestImmutability:
    def test_fields_cannot_be_reassigned(self) -> None:
        policy = ValidationPolicy()

        with pytest.raises(AttributeError):
            policy.fail_fast = True  # type: ignore[misc]

    def test_repr_hides_latch(self) -> None:
        assert "_defaults_latch" not in repr(ValidationPolicy())
