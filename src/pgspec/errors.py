"""Errors raised while synthesizing an instance.

Every error aborts the whole synthesis: no partially built instance is ever
returned. The ``stage`` attribute tells which step of the pipeline failed;
the underlying cause is chained.
"""

from __future__ import annotations


class InstanceSpecError(Exception):
    """Base class for instance synthesis failures."""

    stage: str = "unknown"

    def __init__(self, message: str, instance_name: str | None = None):
        self.instance_name: str | None = instance_name
        if instance_name:
            message = f"{instance_name}: {message}"
        super().__init__(message)


class BaseBuildError(InstanceSpecError):
    """The deterministic instance specification could not be composed."""

    stage = "build"


class PatchError(InstanceSpecError):
    """The JSON patch overlay could not be applied."""


class PatchDecodeError(PatchError):
    stage = "patch-decode"


class PatchApplyError(PatchError):
    stage = "patch-apply"


class PatchDeserializeError(PatchError):
    stage = "patch-deserialize"


class HookError(InstanceSpecError):
    """The lifecycle hook failed."""


class HookInvocationError(HookError):
    stage = "hook-invoke"


class HookResponseTypeError(HookError):
    stage = "hook-response"
