# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Event subscription and notification for Tree.

Subscribers register callbacks for three kinds of events:
    - 'ins': a node was added (or moved in)
    - 'upd': a node value was changed
    - 'del': a node was removed (or moved out)

Callbacks are invoked synchronously, after the mutation completed, with
keyword arguments only.

Example:
    >>> def on_change(node=None, path=None, evt=None, **kw):
    ...     print(evt, path)
    >>> tree.subscribe('logger', any=on_change)
    >>> tree.add('x')
    ins (0,)
"""

from __future__ import annotations

from typing import Any, Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from .node import TreeNode

SubscriberCallback = Callable[..., Any]


class SubscriptionMixin:
    """Mixin adding subscribe/unsubscribe and event dispatch.

    The host class must initialize the three subscriber dicts via
    _init_subscribers().
    """

    _upd_subscribers: dict[str, SubscriberCallback]
    _ins_subscribers: dict[str, SubscriberCallback]
    _del_subscribers: dict[str, SubscriberCallback]

    def _init_subscribers(self) -> None:
        self._upd_subscribers = {}
        self._ins_subscribers = {}
        self._del_subscribers = {}

    def subscribe(
        self,
        subscriber_id: str,
        update: SubscriberCallback | None = None,
        insert: SubscriberCallback | None = None,
        delete: SubscriberCallback | None = None,
        any: SubscriberCallback | None = None,
    ) -> None:
        """Register callbacks for change events.

        Args:
            subscriber_id: Key identifying the subscriber. Registering again
                with the same id replaces the previous callbacks.
            update: Called on value changes.
            insert: Called on node insertion.
            delete: Called on node removal.
            any: Shortcut registering the same callback for all events.
        """
        if any is not None:
            update = insert = delete = any
        if update is not None:
            self._upd_subscribers[subscriber_id] = update
        if insert is not None:
            self._ins_subscribers[subscriber_id] = insert
        if delete is not None:
            self._del_subscribers[subscriber_id] = delete

    def unsubscribe(
        self,
        subscriber_id: str,
        update: bool = False,
        insert: bool = False,
        delete: bool = False,
        any: bool = False,
    ) -> None:
        """Remove callbacks registered under subscriber_id.

        With no flags set, all callbacks of the subscriber are removed.
        """
        if any or not (update or insert or delete):
            update = insert = delete = True
        if update:
            self._upd_subscribers.pop(subscriber_id, None)
        if insert:
            self._ins_subscribers.pop(subscriber_id, None)
        if delete:
            self._del_subscribers.pop(subscriber_id, None)

    def _on_node_inserted(self, node: TreeNode, path: tuple[int, ...]) -> None:
        for callback in list(self._ins_subscribers.values()):
            callback(node=node, path=path, evt='ins')

    def _on_node_updated(
        self, node: TreeNode, path: tuple[int, ...], oldvalue: Any
    ) -> None:
        for callback in list(self._upd_subscribers.values()):
            callback(node=node, path=path, evt='upd', oldvalue=oldvalue)

    def _on_node_deleted(self, path: tuple[int, ...], value: Any) -> None:
        for callback in list(self._del_subscribers.values()):
            callback(node=None, path=path, evt='del', value=value)
