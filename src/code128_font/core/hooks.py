"""Before/after hooks around encoding and validation.

A host application can take over encoding or validation for a request
(a before-hook returning a value) and post-process every result (after-hooks).
Hooks are passed explicitly to the encoder; there is no global registry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, TypeVar

import structlog

if TYPE_CHECKING:
    from code128_font.core.encoder import EncodeRequest

logger = structlog.get_logger()

T = TypeVar("T")

BeforeEncodeHook = Callable[["EncodeRequest"], "str | None"]
AfterEncodeHook = Callable[["EncodeRequest", str], str]
BeforeValidateHook = Callable[["EncodeRequest"], "bool | None"]
AfterValidateHook = Callable[["EncodeRequest", bool], bool]


def _hook_name(hook: Callable) -> str:
    return getattr(hook, "__qualname__", None) or repr(hook)


def _run_before(
    hooks: list[Callable[["EncodeRequest"], T | None]], request: EncodeRequest, stage: str
) -> T | None:
    for hook in hooks:
        result = hook(request)
        if result is not None:
            logger.info("hook_handled_request", stage=stage, hook=_hook_name(hook))
            return result
    return None


def _run_after(
    hooks: list[Callable[["EncodeRequest", T], T]], request: EncodeRequest, result: T
) -> T:
    for hook in hooks:
        result = hook(request, result)
    return result


@dataclass
class HookChain:
    """Ordered hook lists consulted on every encode and validate call.

    Before-hooks run in order; the first to return something other than None
    supplies the result and the built-in algorithm is skipped. After-hooks
    always run, in order, each receiving the previous hook's result.
    """

    before_encode: list[BeforeEncodeHook] = field(default_factory=list)
    after_encode: list[AfterEncodeHook] = field(default_factory=list)
    before_validate: list[BeforeValidateHook] = field(default_factory=list)
    after_validate: list[AfterValidateHook] = field(default_factory=list)

    def run_before_encode(self, request: EncodeRequest) -> str | None:
        return _run_before(self.before_encode, request, "encode")

    def run_after_encode(self, request: EncodeRequest, result: str) -> str:
        return _run_after(self.after_encode, request, result)

    def run_before_validate(self, request: EncodeRequest) -> bool | None:
        return _run_before(self.before_validate, request, "validate")

    def run_after_validate(self, request: EncodeRequest, result: bool) -> bool:
        return _run_after(self.after_validate, request, result)
