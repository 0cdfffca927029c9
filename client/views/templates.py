"""
Pure templates: ``render(state) -> Node``.

Templates are keyed by view name. Interactive elements carry an ``id`` plus
``data-view`` (navigation) or ``data-action``/``data-id`` (actions) so the page
can rebind them after every paint. Three regions are repainted in place when
data arrives: ``featured-grid``, ``documentaries-grid`` and ``comments-list``.
"""
from typing import Any, Callable, Dict, List, Optional

from shared.categories import Category
from client.views.state import FALLBACK, View, ViewState, template_name
from client.views.tree import Node, el
from shared.media_policy import MediaUrlPolicy, embed_for, image_for

FEATURED_GRID = "featured-grid"
DOCUMENTARIES_GRID = "documentaries-grid"
COMMENTS_LIST = "comments-list"
NOTIFICATIONS = "notifications"
LOADING = "loading-indicator"

NAV = [
    (View.home, "Home"),
    (View.documentaries, "Documentaries"),
    (View.subscribe, "Subscribe"),
    (View.donate, "Donate"),
    (View.comments, "Comments"),
    (View.contact, "Contact"),
]

DONATION_AMOUNTS = (5, 10, 25, 50)


# ---------- Fragments ----------

def stars(rating: Any) -> Node:
    try:
        value = max(0.0, min(5.0, float(rating)))
    except (TypeError, ValueError):
        value = 0.0
    full = int(value)
    half = 1 if value - full >= 0.5 else 0
    icons = (
        [el("i", class_="fas fa-star") for _ in range(full)]
        + [el("i", class_="fas fa-star-half-alt") for _ in range(half)]
        + [el("i", class_="far fa-star") for _ in range(5 - full - half)]
    )
    return el("div", *icons, el("span", f"{value:g}"), class_="rating")


def _short_date(value: Any) -> str:
    return str(value)[:10] if value else ""


def documentary_card(doc: Dict[str, Any], policy: MediaUrlPolicy) -> Node:
    doc_id = doc.get("id")
    image_url, is_fallback = image_for(doc_id, doc.get("title", ""), doc.get("image_url"), policy)
    if is_fallback:
        img = el("div", el("img", src=image_url, alt=doc.get("title", "")), class_="card-img fallback")
    else:
        img = el(
            "div",
            el("div", el("button", el("i", class_="fas fa-play"), class_="btn-play",
                         id=f"play-{doc_id}", data_action="watch", data_id=doc_id), class_="card-overlay"),
            class_="card-img",
            style=f"background-image: url('{image_url}')",
        )
    return el(
        "div",
        img,
        el(
            "div",
            el("h3", doc.get("title", "")),
            el("p", doc.get("description", "")),
            el("div", el("span", doc.get("category", ""), class_="category-tag"),
               el("span", doc.get("duration") or "", class_="duration"), class_="card-meta"),
            el("div", stars(doc.get("rating")),
               el("div", el("i", class_="fas fa-download"), el("span", doc.get("downloads") or 0), class_="downloads"),
               class_="card-stats"),
            el(
                "div",
                el("button", el("i", class_="fas fa-download"), " Download", class_="btn btn-outline",
                   id=f"download-{doc_id}", data_action="download", data_id=doc_id),
                el("button", el("i", class_="fas fa-play"), " Watch", class_="btn btn-primary",
                   id=f"watch-{doc_id}", data_action="watch", data_id=doc_id),
                class_="card-actions",
            ),
            class_="card-content",
        ),
        class_="documentary-card",
        data_doc_id=doc_id,
    )


def _loading_grid(count: int) -> Node:
    return el("div", *[el("div", class_="loading-card") for _ in range(count)], class_="loading-grid")


def featured_grid(state: ViewState, policy: MediaUrlPolicy) -> Node:
    docs = state.documentaries[:3]
    body = [documentary_card(d, policy) for d in docs] if docs else [_loading_grid(3)]
    return el("div", *body, class_="documentaries-grid", id=FEATURED_GRID)


def documentaries_grid(state: ViewState, policy: MediaUrlPolicy) -> Node:
    docs = state.visible_documentaries
    if docs:
        body = [documentary_card(d, policy) for d in docs]
    elif state.documentaries:
        body = [el("p", "No documentaries in this category yet.", class_="empty")]
    else:
        body = [_loading_grid(6)]
    return el("div", *body, class_="documentaries-grid", id=DOCUMENTARIES_GRID)


def comments_list(state: ViewState, policy: Optional[MediaUrlPolicy] = None) -> Node:
    if not state.comments:
        body = [el("div", el("i", class_="fas fa-comments"), el("h3", "No comments yet"),
                   el("p", "Be the first to share your thoughts!"), class_="no-comments")]
    else:
        body = [
            el(
                "div",
                el("div", el("div", el("i", class_="fas fa-user"), " ", c.get("author", ""), class_="comment-author"),
                   el("div", _short_date(c.get("date_added")), class_="comment-date"), class_="comment-header"),
                el("div", el("p", c.get("text", "")), class_="comment-text"),
                class_="comment",
                data_comment_id=c.get("id"),
            )
            for c in state.comments
        ]
    return el("div", *body, class_="comment-list", id=COMMENTS_LIST)


REGIONS: Dict[str, Callable[[ViewState, MediaUrlPolicy], Node]] = {
    FEATURED_GRID: featured_grid,
    DOCUMENTARIES_GRID: documentaries_grid,
    COMMENTS_LIST: comments_list,
}


def render_region(region_id: str, state: ViewState, policy: Optional[MediaUrlPolicy] = None) -> Node:
    return REGIONS[region_id](state, policy or MediaUrlPolicy())


def _field(label: str, field_id: str, name: str, type_: str = "text", textarea: bool = False) -> Node:
    control = (
        el("textarea", id=field_id, name=name, class_="form-control", rows=4)
        if textarea
        else el("input", type=type_, id=field_id, name=name, class_="form-control", required=True)
    )
    return el("div", el("label", label, for_=field_id), control, class_="form-group")


def _section(*children: Node, class_: str = "section", id: Optional[str] = None) -> Node:
    return el("section", el("div", *children, class_="container"), class_=class_, id=id)


# ---------- Views ----------

def _home(state: ViewState, policy: MediaUrlPolicy) -> Node:
    return el(
        "div",
        _section(
            el("h2", "Explore the World Through Documentaries"),
            el("p", "Access exclusive content, download documentaries, and join our community of curious minds."),
            el("div",
               el("button", "Start Watching", class_="btn btn-primary", id="hero-documentaries", data_view="documentaries"),
               el("button", "Go Premium", class_="btn btn-outline", id="hero-subscribe", data_view="subscribe"),
               class_="hero-buttons"),
            class_="hero", id="home",
        ),
        _section(
            el("div", el("h2", "Featured Documentaries"),
               el("p", "Handpicked selections from our extensive collection"), class_="section-title"),
            featured_grid(state, policy),
        ),
    )


def _documentaries(state: ViewState, policy: MediaUrlPolicy) -> Node:
    options = [el("option", "All Categories", value="", selected=not state.category)]
    options += [
        el("option", c.value.title(), value=c.value, selected=state.category == c.value)
        for c in Category
    ]
    return _section(
        el("div",
           el("div", el("h2", "All Documentaries"), el("p", "Browse our complete collection"), class_="section-title"),
           el("select", *options, class_="filter-select", id="categoryFilter", data_action="filter-category"),
           class_="section-header"),
        documentaries_grid(state, policy),
        id="documentaries",
    )


def _comments(state: ViewState, policy: MediaUrlPolicy) -> Node:
    user = state.user or {}
    return _section(
        el("div", el("h2", "Community Discussions"), el("p", "Share your thoughts and join the conversation"),
           class_="section-title"),
        el(
            "div",
            el("form",
               el("h3", "Leave a Comment"),
               _field("Your Name", "comment-name", "author"),
               _field("Email", "comment-email", "email", type_="email"),
               _field("Your Comment", "comment-text", "text", textarea=True),
               el("button", "Post Comment", type="submit", class_="btn btn-primary"),
               class_="comment-form", id="commentForm", data_action="submit-comment",
               data_default_author=user.get("name"), data_default_email=user.get("email")),
            comments_list(state),
            class_="comments-container",
        ),
        class_="comments-section", id="comments",
    )


def _subscribe(state: ViewState, policy: MediaUrlPolicy) -> Node:
    plans = [("basic", "Basic", "Free"), ("premium", "Premium", "$9.99/month"), ("family", "Family", "$19.99/month")]
    cards = [
        el("div", el("h3", name), el("div", price, class_="price"),
           el("button", "Choose", class_="btn btn-primary btn-block", id=f"plan-{key}",
              data_action="subscribe", data_id=key),
           class_="pricing-card")
        for key, name, price in plans
    ]
    return _section(
        el("div", el("h2", "Unlock Premium Features"),
           el("p", "Get unlimited access to our entire library and exclusive content"), class_="subscription-header"),
        el("div", *cards, class_="pricing-grid"),
        class_="subscription", id="subscribe",
    )


def _donate(state: ViewState, policy: MediaUrlPolicy) -> Node:
    buttons = [
        el("button", f"${amount}", class_="btn btn-outline", id=f"donate-{amount}", data_action="donate", data_id=amount)
        for amount in DONATION_AMOUNTS
    ]
    return _section(
        el("h2", "Support Independent Documentaries"),
        el("p", "Your donation helps us produce and share stories that matter."),
        el("div", *buttons, class_="donation-amounts"),
        class_="donate-section", id="donate",
    )


def _contact(state: ViewState, policy: MediaUrlPolicy) -> Node:
    return _section(
        el("h2", "Contact Us"),
        el("form",
           _field("Name", "contact-name", "name"),
           _field("Email", "contact-email", "email", type_="email"),
           _field("Message", "contact-message", "message", textarea=True),
           el("button", "Send Message", type="submit", class_="btn btn-primary"),
           id="contactForm", data_action="contact", class_="contact-form"),
        class_="contact-section", id="contact",
    )


def _admin_table(state: ViewState, policy: MediaUrlPolicy) -> Node:
    if not state.documentaries:
        rows = [el("tr", el("td", "No documentaries found", colspan=6, class_="text-center"))]
    else:
        rows = []
        for d in state.documentaries:
            doc_id = d.get("id")
            description = d.get("description", "")
            rows.append(el(
                "tr",
                el("td", el("strong", d.get("title", "")), el("br"),
                   el("small", description[:60] + ("..." if len(description) > 60 else ""), class_="text-muted")),
                el("td", el("span", d.get("category", ""), class_="category-badge")),
                el("td", stars(d.get("rating"))),
                el("td", d.get("downloads") or 0),
                el("td", _short_date(d.get("date_added"))),
                el("td",
                   el("button", "Edit", class_="btn-icon btn-edit", id=f"edit-{doc_id}",
                      data_action="edit", data_id=doc_id),
                   el("button", "Delete", class_="btn-icon btn-delete", id=f"delete-{doc_id}",
                      data_action="delete", data_id=doc_id),
                   class_="action-buttons"),
                data_doc_id=doc_id,
            ))
    head = el("tr", *[el("th", h) for h in ("Title", "Category", "Rating", "Downloads", "Date Added", "Actions")])
    return el("table", el("thead", head), el("tbody", *rows), class_="admin-table", id="admin-table")


def _add_form() -> Node:
    options = [el("option", c.value.title(), value=c.value) for c in Category]
    return el(
        "form",
        el("h3", "Add New Documentary"),
        _field("Title", "doc-title", "title"),
        _field("Description", "doc-description", "description", textarea=True),
        el("div", el("label", "Category", for_="doc-category"),
           el("select", *options, id="doc-category", name="category", class_="form-control"), class_="form-group"),
        _field("Image URL", "doc-image", "image_url", type_="url"),
        _field("Video URL", "doc-video", "video_url", type_="url"),
        _field("PDF URL", "doc-pdf", "pdf_url", type_="url"),
        _field("Duration", "doc-duration", "duration"),
        _field("Rating", "doc-rating", "rating", type_="number"),
        el("button", "Add Documentary", type="submit", class_="btn btn-primary"),
        id="addDocumentaryForm", data_action="add-documentary", class_="admin-form",
    )


def _admin(state: ViewState, policy: MediaUrlPolicy) -> Node:
    total_downloads = sum(int(d.get("downloads") or 0) for d in state.documentaries)
    return _section(
        el("div",
           el("h2", "Admin Dashboard"),
           el("div",
              el("span", f"{len(state.documentaries)} Documentaries", class_="stat"),
              el("span", f"{len(state.comments)} Comments", class_="stat"),
              el("span", f"{total_downloads} Total Downloads", class_="stat"),
              class_="admin-stats"),
           class_="admin-header"),
        el("div",
           el("button", "Refresh Data", class_="btn btn-outline", id="refreshBtn", data_action="refresh"),
           el("button", "Logout Admin", class_="btn btn-outline", id="adminLogoutBtn", data_action="admin-logout"),
           class_="admin-actions"),
        _add_form(),
        el("div", el("h3", "Documentaries Management"), _admin_table(state, policy), class_="admin-content"),
        class_="admin-panel",
    )


def _auth_card(title: str, subtitle: str, form: Node, *footer: Node) -> Node:
    return _section(
        el("div", el("div", el("h2", title), el("p", subtitle), class_="auth-header"), form,
           el("div", *footer, class_="auth-footer"), class_="auth-card"),
        class_="auth-section",
    )


def _login(state: ViewState, policy: MediaUrlPolicy) -> Node:
    form = el("form", _field("Email", "login-email", "email", type_="email"),
              _field("Password", "login-password", "password", type_="password"),
              el("button", "Login", type="submit", class_="btn btn-primary btn-block"),
              class_="auth-form", id="loginForm", data_action="user-login")
    return _auth_card(
        "Welcome to the Documentary Catalog", "Please login to access our exclusive content", form,
        el("p", "Don't have an account? ", el("a", "Register here", href="#register", id="showRegister",
                                                data_view="register")),
    )


def _register(state: ViewState, policy: MediaUrlPolicy) -> Node:
    form = el("form", _field("Full Name", "register-name", "name"),
              _field("Email", "register-email", "email", type_="email"),
              _field("Password", "register-password", "password", type_="password"),
              _field("Confirm Password", "register-confirm", "confirm", type_="password"),
              el("button", "Create Account", type="submit", class_="btn btn-primary btn-block"),
              class_="auth-form", id="registerForm", data_action="user-register")
    return _auth_card(
        "Create Account", "Join our community of documentary lovers", form,
        el("p", "Already have an account? ", el("a", "Login here", href="#login", id="showLogin", data_view="login")),
    )


def _admin_login(state: ViewState, policy: MediaUrlPolicy) -> Node:
    form = el("form", _field("Username", "admin-username", "username"),
              _field("Password", "admin-password", "password", type_="password"),
              el("button", "Login to Admin Panel", type="submit", class_="btn btn-primary btn-block"),
              class_="auth-form", id="adminLoginForm", data_action="admin-login")
    return _auth_card(
        "Admin Login", "Access the administration panel", form,
        el("button", "Back to Site", class_="btn btn-outline btn-block", id="adminBackBtn", data_view="home"),
    )


TEMPLATES: Dict[str, Callable[[ViewState, MediaUrlPolicy], Node]] = {
    "home": _home,
    "documentaries": _documentaries,
    "subscribe": _subscribe,
    "donate": _donate,
    "comments": _comments,
    "contact": _contact,
    "admin": _admin,
    "admin_login": _admin_login,
    "login": _login,
    "register": _register,
}


# ---------- Page chrome ----------

def _header(state: ViewState, active: str) -> Node:
    links = [
        el("li", el("a", label, href=f"#{view.value}", id=f"nav-{view.value}", data_view=view.value,
                    class_="nav-link active" if view.value == active else "nav-link"))
        for view, label in NAV
    ]
    if state.is_user:
        name = (state.user or {}).get("name") or "User"
        auth: List[Node] = [el("span", f"Welcome, {name}!", class_="user-welcome"),
                            el("button", "Logout", class_="btn btn-outline", id="logoutBtn", data_action="user-logout")]
    else:
        auth = [el("button", "Login", class_="btn btn-outline", id="loginBtn", data_view="login"),
                el("button", "Register", class_="btn btn-primary", id="registerBtn", data_view="register")]
    if state.is_admin:
        auth.append(el("button", "Admin Panel", class_="btn btn-primary", id="adminBtn", data_view="admin"))
    else:
        auth.append(el("button", "Admin Login", class_="btn btn-outline", id="adminLoginBtn", data_view="admin"))
    return el(
        "header",
        el("div", el("h1", "Documentary Catalog"), class_="logo"),
        el("nav", el("ul", *links)),
        el("div", *auth, class_="auth-buttons"),
    )


def notifications(state: ViewState) -> Node:
    toast = state.notification
    if toast is None:
        return el("div", id=NOTIFICATIONS, class_="notification-container")
    return el(
        "div",
        el(
            "div",
            el("i", class_=f"fas fa-{toast.icon}"),
            el("span", toast.message),
            el("button", "×", class_="close-notification", id="closeNotification", data_action="dismiss"),
            class_=f"notification {toast.kind} show",
        ),
        id=NOTIFICATIONS,
        class_="notification-container",
    )


def loading_indicator(state: ViewState) -> Node:
    if not state.loading:
        return el("div", id=LOADING)
    return el("div", el("div", class_="spinner"), id=LOADING, class_="loading-overlay")


def _details_modal(state: ViewState) -> Optional[Node]:
    doc = state.selected
    if doc is None:
        return None
    embed = embed_for(doc.get("video_url"))
    if embed is None:
        player = el("p", "No video available for this documentary.", class_="no-video")
    elif embed.kind == "video":
        player = el("video", el("source", src=embed.src), controls=True, class_="player")
    else:
        player = el("iframe", src=embed.src, allowfullscreen=True, frameborder="0", class_="player")
    links = []
    if doc.get("pdf_url"):
        links.append(el("a", "Open PDF", href=doc["pdf_url"], target="_blank", rel="noopener", class_="btn btn-outline"))
    return el(
        "div",
        el("div",
           el("button", "×", class_="close-modal", id="closeDetails", data_action="close-details"),
           el("h2", doc.get("title", "")),
           player,
           el("p", doc.get("description", "")),
           *links,
           class_="modal-content"),
        class_="modal show",
        id="details-modal",
    )


def render(state: ViewState, policy: Optional[MediaUrlPolicy] = None) -> Node:
    policy = policy or MediaUrlPolicy()
    name = template_name(state)
    active = "admin" if name == "admin_login" else name
    banner = None
    if state.source == FALLBACK:
        banner = el("div", "Showing offline sample content; the catalog server is unreachable.",
                    class_="offline-banner", id="offline-banner")
    return el(
        "div",
        _header(state, active),
        banner,
        el("main", TEMPLATES[name](state, policy), data_view_name=name),
        el("footer", el("p", "© Documentary Catalog")),
        notifications(state),
        _details_modal(state),
        loading_indicator(state),
        id="app",
    )
