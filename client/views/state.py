from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from client.views.notifications import Toast


class View(str, Enum):
    home = "home"
    documentaries = "documentaries"
    subscribe = "subscribe"
    donate = "donate"
    comments = "comments"
    contact = "contact"
    admin = "admin"
    login = "login"
    register = "register"


PUBLIC_VIEWS = {View.home, View.login, View.register}

REMOTE = "remote"
FALLBACK = "fallback"


@dataclass
class ViewState:
    view: View = View.home
    documentaries: List[Dict[str, Any]] = field(default_factory=list)
    comments: List[Dict[str, Any]] = field(default_factory=list)
    user: Optional[Dict[str, Any]] = None
    is_admin: bool = False
    category: Optional[str] = None
    selected_id: Optional[int] = None
    loading: bool = False
    source: str = REMOTE
    notification: Optional[Toast] = None

    @property
    def is_user(self) -> bool:
        return self.user is not None

    @property
    def visible_documentaries(self) -> List[Dict[str, Any]]:
        if not self.category:
            return self.documentaries
        return [d for d in self.documentaries if d.get("category") == self.category]

    @property
    def selected(self) -> Optional[Dict[str, Any]]:
        if self.selected_id is None:
            return None
        return next((d for d in self.documentaries if d.get("id") == self.selected_id), None)


def resolve_view(requested: View, is_user: bool) -> View:
    """Views other than home/login/register need a signed-in user."""
    if requested not in PUBLIC_VIEWS and not is_user:
        return View.login
    return requested


def template_name(state: ViewState) -> str:
    """Name of the template to paint for ``state`` (the admin view falls back to its login form)."""
    view = resolve_view(state.view, state.is_user)
    if view is View.admin and not state.is_admin:
        return "admin_login"
    return view.value
