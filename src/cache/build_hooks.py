"""Build-system hook registry and completion adapters.

This module models the two build lifecycle hooks the cache taps into
and adapts coroutine results to single-shot completion callbacks for
callback-style build hosts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from core.constants import SUPPORTED_HOOK_NAMES
from core.errors import DocsCacheConfigError

HookHandler = Callable[[], Awaitable[Any]]
CompletionCallback = Callable[[BaseException | None], None]


@dataclass(frozen=True)
class HookTap:
    """One registered handler on a named hook."""

    plugin_name: str
    handler: HookHandler


@dataclass
class BuildHookRegistry:
    """Named async hooks invoked serially by the build pipeline."""

    taps: dict[str, list[HookTap]] = field(
        default_factory=lambda: {hook_name: [] for hook_name in SUPPORTED_HOOK_NAMES}
    )

    def tap(self, hook_name: str, plugin_name: str, handler: HookHandler) -> None:
        """Register a handler on ``hook_name``.

        Raises:
            DocsCacheConfigError: If the hook name is unknown.
        """
        self._expect_hook(hook_name).append(HookTap(plugin_name=plugin_name, handler=handler))

    async def call(self, hook_name: str) -> list[Any]:
        """Await every handler on ``hook_name`` in registration order.

        Args:
            hook_name: Hook to run.

        Returns:
            Handler results in registration order.

        Raises:
            DocsCacheConfigError: If the hook name is unknown.
            Exception: The first handler error, unchanged.
        """
        results = []
        for hook_tap in list(self._expect_hook(hook_name)):
            results.append(await hook_tap.handler())
        return results

    def _expect_hook(self, hook_name: str) -> list[HookTap]:
        if hook_name not in self.taps:
            raise DocsCacheConfigError(
                f"Unknown build hook '{hook_name}'. "
                f"Supported hooks: {', '.join(sorted(self.taps))}."
            )
        return self.taps[hook_name]


async def run_with_callback(operation: Awaitable[Any], callback: CompletionCallback) -> None:
    """Await ``operation`` and report its completion exactly once.

    Args:
        operation: Awaitable lifecycle operation.
        callback: Receives ``None`` on success or the raised error.
    """
    try:
        await operation
    except Exception as error:
        callback(error)
        return
    callback(None)
