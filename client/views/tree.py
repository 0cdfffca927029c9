"""
Retained element tree with HTML serialization and a minimal diff/patch step.

Patches address nodes by their child-index path from the root, so ``()`` is the
root itself and ``(1, 0)`` is the first child of the root's second child.
"""
import copy
from dataclasses import dataclass, field
from html import escape
from typing import Dict, Iterator, List, Optional, Tuple, Union

TEXT = "#text"
VOID_TAGS = {"br", "hr", "img", "input", "meta", "link"}

Path = Tuple[int, ...]


@dataclass
class Node:
    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)
    text: Optional[str] = None

    @property
    def is_text(self) -> bool:
        return self.tag == TEXT

    @property
    def id(self) -> Optional[str]:
        return self.attrs.get("id")


def text(value) -> Node:
    return Node(TEXT, text="" if value is None else str(value))


def el(tag: str, *children: Union[Node, str, int, float, None], **attrs) -> Node:
    """
    Build an element. Keyword names map to attributes: a trailing underscore is
    dropped (``class_``) and other underscores become dashes (``data_view``).
    ``None`` and ``False`` attributes are left out; ``True`` renders the bare name.
    """
    rendered: Dict[str, str] = {}
    for key, value in attrs.items():
        if value is None or value is False:
            continue
        name = key[:-1] if key.endswith("_") else key
        name = name.replace("_", "-")
        rendered[name] = name if value is True else str(value)
    kids = [c if isinstance(c, Node) else text(c) for c in children if c is not None]
    return Node(tag, rendered, kids)


def to_html(node: Node) -> str:
    if node.is_text:
        return escape(node.text or "")
    attrs = "".join(f' {k}="{escape(v, quote=True)}"' for k, v in node.attrs.items())
    if node.tag in VOID_TAGS:
        return f"<{node.tag}{attrs}>"
    inner = "".join(to_html(c) for c in node.children)
    return f"<{node.tag}{attrs}>{inner}</{node.tag}>"


def walk(node: Node, path: Path = ()) -> Iterator[Tuple[Path, Node]]:
    yield path, node
    for i, child in enumerate(node.children):
        yield from walk(child, path + (i,))


def find_by_id(root: Node, element_id: str) -> Optional[Tuple[Path, Node]]:
    for path, node in walk(root):
        if node.id == element_id:
            return path, node
    return None


def node_at(root: Node, path: Path) -> Node:
    node = root
    for i in path:
        node = node.children[i]
    return node


def text_content(node: Node) -> str:
    if node.is_text:
        return node.text or ""
    return "".join(text_content(c) for c in node.children)


# ---------- Diff / patch ----------

@dataclass(frozen=True)
class Patch:
    op: str             # "replace" | "attrs" | "text" | "insert" | "remove"
    path: Path
    node: Optional[Node] = None
    attrs: Optional[Dict[str, str]] = None
    text: Optional[str] = None


def diff(old: Node, new: Node, path: Path = ()) -> List[Patch]:
    if old.tag != new.tag:
        return [Patch("replace", path, node=new)]
    if old.is_text:
        return [] if old.text == new.text else [Patch("text", path, text=new.text)]

    patches: List[Patch] = []
    if old.attrs != new.attrs:
        patches.append(Patch("attrs", path, attrs=dict(new.attrs)))

    common = min(len(old.children), len(new.children))
    for i in range(common):
        patches.extend(diff(old.children[i], new.children[i], path + (i,)))
    for i in range(common, len(new.children)):
        patches.append(Patch("insert", path + (i,), node=new.children[i]))
    # highest index first so earlier removals do not shift later ones
    for i in range(len(old.children) - 1, common - 1, -1):
        patches.append(Patch("remove", path + (i,)))
    return patches


def apply(root: Node, patches: List[Patch]) -> Node:
    """Return a patched copy of ``root``; the input tree is left untouched."""
    root = copy.deepcopy(root)
    for p in patches:
        if p.op == "replace" and not p.path:
            root = copy.deepcopy(p.node)
            continue
        if p.op in ("attrs", "text"):
            target = node_at(root, p.path)
            if p.op == "attrs":
                target.attrs = dict(p.attrs or {})
            else:
                target.text = p.text
            continue

        parent = node_at(root, p.path[:-1])
        idx = p.path[-1]
        if p.op == "replace":
            parent.children[idx] = copy.deepcopy(p.node)
        elif p.op == "insert":
            parent.children.insert(idx, copy.deepcopy(p.node))
        elif p.op == "remove":
            del parent.children[idx]
        else:
            raise ValueError(f"unknown patch op: {p.op}")
    return root
