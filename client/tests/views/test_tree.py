import pytest

from client.views.tree import Node, apply, diff, el, find_by_id, text, text_content, to_html


def test_should_map_keyword_attributes():
    node = el("button", "Go", class_="btn", data_view="home", disabled=True, title=None, hidden=False)

    assert node.attrs == {"class": "btn", "data-view": "home", "disabled": "disabled"}
    assert node.children == [text("Go")]


def test_should_escape_text_and_attributes():
    node = el("p", "<script>alert(1)</script>", title='say "hi"')

    assert to_html(node) == '<p title="say &quot;hi&quot;">&lt;script&gt;alert(1)&lt;/script&gt;</p>'


def test_should_render_void_elements_without_closing_tag():
    assert to_html(el("div", el("img", src="/a.png"), el("br"))) == '<div><img src="/a.png"><br></div>'


def test_should_find_nodes_by_id():
    tree = el("div", el("section", el("ul", el("li", "x", id="item")), id="list"))

    path, node = find_by_id(tree, "item")

    assert path == (0, 0, 0)
    assert text_content(node) == "x"
    assert find_by_id(tree, "missing") is None


@pytest.mark.parametrize(
    "old, new",
    [
        (el("ul", el("li", "a")), el("ul", el("li", "a"), el("li", "b"), el("li", "c"))),
        (el("ul", el("li", "a"), el("li", "b"), el("li", "c")), el("ul", el("li", "a"))),
        (el("div", el("p", "old"), class_="x"), el("div", el("p", "new"), class_="y")),
        (el("div", el("p", "a"), el("span", "b")), el("div", el("p", "a"), el("em", "b"))),
        (el("div"), el("section")),
    ],
)
def test_should_turn_old_tree_into_new_tree(old: Node, new: Node):
    assert apply(old, diff(old, new)) == new


def test_should_produce_no_patches_for_identical_trees():
    tree = el("div", el("p", "same", class_="c"))
    assert diff(tree, el("div", el("p", "same", class_="c"))) == []


def test_should_not_mutate_the_input_tree():
    old = el("ul", el("li", "a"))
    snapshot = to_html(old)

    apply(old, diff(old, el("ul", el("li", "b"), el("li", "c"))))

    assert to_html(old) == snapshot


def test_should_remove_trailing_children_from_the_end():
    patches = diff(el("ul", el("li", "a"), el("li", "b"), el("li", "c")), el("ul"))
    assert [(p.op, p.path) for p in patches] == [("remove", (2,)), ("remove", (1,)), ("remove", (0,))]
