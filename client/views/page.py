import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

from client.views.tree import Node, Patch, apply, diff, find_by_id, walk

logger = logging.getLogger(__name__)

NavigateHandler = Callable[[str], Awaitable[Any]]
ActionHandler = Callable[[str, Optional[str], Dict[str, Any]], Awaitable[Any]]


@dataclass(frozen=True)
class Binding:
    element_id: str
    view: Optional[str] = None
    action: Optional[str] = None
    target_id: Optional[str] = None


class Page:
    """
    The painted document. A full paint swaps the whole tree; hot regions are
    patched in place. Either way the handler table is rebuilt afterwards, so
    only elements present in the current tree can be clicked.
    """

    def __init__(self, on_navigate: NavigateHandler, on_action: ActionHandler) -> None:
        self.on_navigate = on_navigate
        self.on_action = on_action
        self.tree: Optional[Node] = None
        self.bindings: Dict[str, Binding] = {}
        self.paints = 0

    def paint(self, tree: Node) -> None:
        self.tree = tree
        self.paints += 1
        self._rebind()

    def patch_region(self, region_id: str, node: Node) -> Optional[List[Patch]]:
        """
        Repaint one region in place. Returns the applied patches, or ``None``
        when the region is not on the page (the view changed in the meantime).
        """
        if self.tree is None:
            return None
        found = find_by_id(self.tree, region_id)
        if found is None:
            logger.debug("Region %s not on page; skipping patch", region_id)
            return None
        path, old = found
        patches = [Patch(p.op, path + p.path, p.node, p.attrs, p.text) for p in diff(old, node)]
        self.tree = apply(self.tree, patches)
        self._rebind()
        return patches

    def _rebind(self) -> None:
        bindings: Dict[str, Binding] = {}
        for _, node in walk(self.tree):
            element_id = node.id
            if not element_id:
                continue
            view = node.attrs.get("data-view")
            action = node.attrs.get("data-action")
            if view or action:
                bindings[element_id] = Binding(element_id, view, action, node.attrs.get("data-id"))
        self.bindings = bindings

    def element(self, element_id: str) -> Optional[Node]:
        found = find_by_id(self.tree, element_id) if self.tree is not None else None
        return found[1] if found else None

    async def click(self, element_id: str) -> Any:
        binding = self.bindings.get(element_id)
        if binding is None:
            raise LookupError(f"nothing bound to #{element_id}")
        if binding.view:
            return await self.on_navigate(binding.view)
        return await self.on_action(binding.action, binding.target_id, {})

    async def submit(self, form_id: str, values: Dict[str, Any]) -> Any:
        binding = self.bindings.get(form_id)
        if binding is None or not binding.action:
            raise LookupError(f"no form handler bound to #{form_id}")
        return await self.on_action(binding.action, binding.target_id, dict(values))

    async def change(self, element_id: str, value: Any) -> Any:
        return await self.submit(element_id, {"value": value})
