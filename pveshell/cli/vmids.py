"""Expansion of the ``--vmid`` selector syntax.

A selector is a comma separated list of:

* ``100`` or ``TestDebian``: a VM/CT by id or name;
* ``100:107``: an inclusive id range;
* ``@pool-<pool>``, ``@all-<node>``, ``@all``: every VM/CT of a pool, of a node,
  or of the cluster.

Any item prefixed with ``-`` excludes what it matches. A selector holding only
exclusions starts from the whole cluster.
"""

from __future__ import annotations

from typing import Iterable

from pveshell.models import VmResource

ALL = "@all"
ALL_NODE_PREFIX = "@all-"
POOL_PREFIX = "@pool-"
EXCLUDE_PREFIX = "-"


def _same(left: str, right: str) -> bool:
    return left.casefold() == right.casefold()


def _matches(vm: VmResource, token: str) -> bool:
    if token == ALL:
        return True
    if token.startswith(ALL_NODE_PREFIX):
        return _same(vm.node, token[len(ALL_NODE_PREFIX):])
    if token.startswith(POOL_PREFIX):
        return _same(vm.pool, token[len(POOL_PREFIX):])

    start, sep, end = token.partition(":")
    if sep and start.isdigit() and end.isdigit():
        return int(start) <= vm.vm_id <= int(end)
    if token.isdigit():
        return vm.vm_id == int(token)
    return _same(vm.name, token)


def parse_selector(selector: str) -> tuple[list[str], list[str]]:
    """Split a selector into include and exclude tokens."""
    tokens = [token.strip() for token in selector.split(",") if token.strip()]
    includes = [token for token in tokens if not token.startswith(EXCLUDE_PREFIX)]
    excludes = [token[1:] for token in tokens if token.startswith(EXCLUDE_PREFIX)]
    if excludes and not includes:
        includes = [ALL]
    return includes, excludes


def select_vms(resources: Iterable[VmResource], selector: str | None) -> list[VmResource]:
    """Return the resources matched by ``selector``, ordered by id.

    An empty selector matches every resource.
    """
    resources = list(resources)
    if selector and selector.strip():
        includes, excludes = parse_selector(selector)
        resources = [
            vm
            for vm in resources
            if any(_matches(vm, token) for token in includes)
            and not any(_matches(vm, token) for token in excludes)
        ]
    return sorted(resources, key=lambda vm: vm.vm_id)
