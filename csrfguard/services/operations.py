from __future__ import annotations

from collections.abc import Collection


def is_under_prefix(path: str, prefix: str) -> bool:
    prefix = prefix.rstrip("/")
    return path == prefix or path.startswith(prefix + "/")


def operations_for_path(path: str, prefix: str) -> list[str]:
    """Split an RPC path such as ``/api/trpc/public.submitInquiry,auth.me`` into operation names."""
    if not is_under_prefix(path, prefix):
        return []
    remainder = path[len(prefix.rstrip("/")) :].strip("/")
    if not remainder or "/" in remainder:
        return []
    return [name.strip() for name in remainder.split(",")]


def is_exempt_operation(path: str, prefix: str, exempt: Collection[str]) -> bool:
    """Exact-match exemption: every operation in the (possibly batched) call must be exempt."""
    names = operations_for_path(path, prefix)
    return bool(names) and all(name in exempt for name in names)
