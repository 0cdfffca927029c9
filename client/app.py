"""
Application controller for the catalog client.

Owns the view state, paints it through a ``Page`` and turns user actions into
gateway calls. Every action returns ``Ok``, ``Degraded`` or ``Failed`` and posts
one toast. A mutation whose request never reached the server is applied to the
local mirror and reported as ``Degraded``; a request the server answered with
an error (bad credentials, validation) is ``Failed`` and changes nothing.
"""
import asyncio
import itertools
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from client.fallback import fallback_dataset
from client.gateway import CatalogApiClient, NetworkError
from client.ports.token_storage_port import ADMIN, USER
from client.results import Degraded, Failed, Ok, Result
from client.views import templates
from client.views.notifications import ERROR, INFO, SUCCESS, WARNING, Notifier
from client.views.page import Page
from client.views.state import FALLBACK, REMOTE, View, ViewState, resolve_view
from shared.media_policy import MediaUrlPolicy

logger = logging.getLogger(__name__)

DEFAULT_LOAD_TIMEOUT = 5.0


class CatalogApp:
    def __init__(
        self,
        api: CatalogApiClient,
        notifier: Optional[Notifier] = None,
        policy: Optional[MediaUrlPolicy] = None,
        load_timeout: float = DEFAULT_LOAD_TIMEOUT,
    ) -> None:
        self.api = api
        self.notifier = notifier or Notifier()
        self.policy = policy or MediaUrlPolicy()
        self.load_timeout = load_timeout
        self.state = ViewState(is_admin=api.is_admin)
        self.page = Page(self.navigate, self.dispatch)
        # ids for records that only exist locally; negative so they never collide with server ids
        self._local_ids = itertools.count(-1, -1)

    # ---------- Painting ----------

    def render(self) -> None:
        self.state.notification = self.notifier.current
        self.page.paint(templates.render(self.state, self.policy))

    def refresh_regions(self) -> None:
        for region_id in templates.REGIONS:
            self.page.patch_region(region_id, templates.render_region(region_id, self.state, self.policy))

    def notify(self, message: str, kind: str = INFO) -> None:
        self.state.notification = self.notifier.show(message, kind)
        self.page.patch_region(templates.NOTIFICATIONS, templates.notifications(self.state))

    def dismiss_notification(self) -> None:
        self.notifier.dismiss()
        self.state.notification = None
        self.page.patch_region(templates.NOTIFICATIONS, templates.notifications(self.state))

    def _set_loading(self, loading: bool) -> None:
        self.state.loading = loading
        self.page.patch_region(templates.LOADING, templates.loading_indicator(self.state))

    # ---------- Lifecycle ----------

    async def start(self) -> str:
        """Paint immediately, then fill in the data and the stored session's profile."""
        self.render()
        if not self.api.is_user:
            return await self.load_initial_data()
        source, _ = await asyncio.gather(self.load_initial_data(), self._restore_user())
        self.render()
        return source

    async def _restore_user(self) -> None:
        try:
            self.state.user = await self.api.me()
        except NetworkError as e:
            if e.is_auth_error:
                self.api.logout(USER)
            else:
                # offline: keep the stored session, profile details arrive later
                self.state.user = {"name": "User"}

    async def load_initial_data(self) -> str:
        """
        Race the bulk fetch against ``load_timeout``. On timeout or failure the
        built-in sample dataset is shown instead. Returns the data source used.
        """
        self._set_loading(True)
        try:
            docs, comments = await asyncio.wait_for(
                asyncio.gather(self.api.get_documentaries(), self.api.list_comments_or_empty()),
                timeout=self.load_timeout,
            )
            self.state.documentaries, self.state.comments = list(docs), list(comments)
            self.state.source = REMOTE
        except (NetworkError, asyncio.TimeoutError) as e:
            logger.warning("Using fallback data: %s", str(e) or "timeout")
            self.state.documentaries, self.state.comments = fallback_dataset()
            self.state.source = FALLBACK
        self._set_loading(False)
        self.refresh_regions()
        return self.state.source

    async def refresh(self) -> Result:
        self.notify("Refreshing data...", INFO)
        source = await self.load_initial_data()
        self.render()
        if source == FALLBACK:
            self.notify("Server unreachable; showing sample data.", WARNING)
            return Degraded(source, NetworkError("catalog unavailable"))
        self.notify("Data refreshed successfully!", SUCCESS)
        return Ok(source)

    # ---------- Navigation ----------

    async def navigate(self, view: Any) -> View:
        try:
            requested = View(view)
        except ValueError:
            requested = View.home
        self.state.view = resolve_view(requested, self.state.is_user)
        self.state.selected_id = None
        self.render()
        return self.state.view

    async def dispatch(self, action: str, target_id: Optional[str], values: Dict[str, Any]) -> Any:
        doc_id = int(target_id) if target_id not in (None, "") and str(target_id).lstrip("-").isdigit() else None
        if action == "download":
            return await self.download(doc_id)
        if action == "watch":
            return await self.view_details(doc_id)
        if action == "close-details":
            return await self.close_details()
        if action == "delete":
            return await self.delete_documentary(doc_id)
        if action == "edit":
            return await self.edit_documentary(doc_id)
        if action == "add-documentary":
            return await self.add_documentary(values)
        if action == "submit-comment":
            return await self.submit_comment(values.get("author"), values.get("email"), values.get("text"))
        if action == "filter-category":
            return await self.filter_category(values.get("value"))
        if action == "refresh":
            return await self.refresh()
        if action == "user-login":
            return await self.user_login(values.get("email"), values.get("password"))
        if action == "user-register":
            return await self.user_register(
                values.get("name"), values.get("email"), values.get("password"), values.get("confirm")
            )
        if action == "admin-login":
            return await self.admin_login(values.get("username"), values.get("password"))
        if action == "user-logout":
            return await self.user_logout()
        if action == "admin-logout":
            return await self.admin_logout()
        if action == "subscribe":
            return await self.subscribe(target_id)
        if action == "donate":
            return await self.donate(doc_id)
        if action == "contact":
            return await self.contact(values)
        if action == "dismiss":
            self.dismiss_notification()
            return None
        raise LookupError(f"unknown action: {action}")

    # ---------- Guards ----------

    async def _require_user(self, message: str) -> Optional[Failed]:
        if self.state.is_user:
            return None
        self.notify(message, WARNING)
        await self.navigate(View.login)
        return Failed(PermissionError("login required"))

    def _require_admin(self) -> Optional[Failed]:
        if self.state.is_admin:
            return None
        self.notify("Admin access required", ERROR)
        return Failed(PermissionError("admin required"))

    def _admin_session_lost(self, e: NetworkError) -> None:
        if e.status_code == 401:
            self.api.logout(ADMIN)
            self.state.is_admin = False

    # ---------- Session actions ----------

    async def user_login(self, email: Optional[str], password: Optional[str]) -> Result:
        if not email or not password:
            self.notify("Please fill in all fields", ERROR)
            return Failed(ValueError("missing fields"))
        try:
            data = await self.api.user_login(email, password)
        except NetworkError as e:
            self.notify("Invalid email or password" if e.is_client_error else "Login failed. Please try again.", ERROR)
            return Failed(e)
        self.state.user = data.get("user") or {"email": email}
        await self.navigate(View.home)
        self.notify("Login successful! Welcome back.", SUCCESS)
        return Ok(data)

    async def user_register(
        self, name: Optional[str], email: Optional[str], password: Optional[str], confirm: Optional[str]
    ) -> Result:
        if not name or not email or not password or not confirm:
            self.notify("Please fill in all fields", ERROR)
            return Failed(ValueError("missing fields"))
        if password != confirm:
            self.notify("Passwords do not match", ERROR)
            return Failed(ValueError("password mismatch"))
        try:
            data = await self.api.user_register(name, email, password)
        except NetworkError as e:
            if e.status_code == 409:
                self.notify("An account with this email already exists", ERROR)
            elif e.is_client_error:
                self.notify(f"Registration failed: {e}", ERROR)
            else:
                self.notify("Registration failed. Please try again.", ERROR)
            return Failed(e)
        self.state.user = data.get("user") or {"name": name, "email": email}
        await self.navigate(View.home)
        self.notify("Registration successful! Welcome aboard.", SUCCESS)
        return Ok(data)

    async def admin_login(self, username: Optional[str], password: Optional[str]) -> Result:
        if not username or not password:
            self.notify("Please fill in all fields", ERROR)
            return Failed(ValueError("missing fields"))
        try:
            data = await self.api.admin_login(username, password)
        except NetworkError as e:
            self.notify("Invalid admin credentials" if e.is_client_error else "Admin login failed", ERROR)
            return Failed(e)
        self.state.is_admin = True
        await self.navigate(View.admin)
        self.notify("Admin login successful!", SUCCESS)
        return Ok(data)

    async def user_logout(self) -> Result:
        self.api.logout(USER)
        self.state.user = None
        await self.navigate(View.home)
        self.notify("Logged out successfully", INFO)
        return Ok(None)

    async def admin_logout(self) -> Result:
        self.api.logout(ADMIN)
        self.state.is_admin = False
        await self.navigate(View.home)
        self.notify("Admin logged out", INFO)
        return Ok(None)

    # ---------- Catalog actions ----------

    def _find(self, doc_id: Optional[int]) -> Optional[Dict[str, Any]]:
        return next((d for d in self.state.documentaries if d.get("id") == doc_id), None)

    async def download(self, doc_id: Optional[int]) -> Result:
        denied = await self._require_user("Please login to download documentaries")
        if denied:
            return denied
        doc = self._find(doc_id)
        try:
            await self.api.track_download(doc_id)
        except NetworkError as e:
            if not e.is_unreachable:
                self.notify(f"Download failed: {e}", ERROR)
                return Failed(e)
            if doc is not None:
                doc["downloads"] = int(doc.get("downloads") or 0) + 1
            self.refresh_regions()
            self.notify("Download started; it will be counted when the server is reachable.", WARNING)
            return Degraded(doc, e)
        if doc is not None:
            doc["downloads"] = int(doc.get("downloads") or 0) + 1
        self.refresh_regions()
        self.notify("Download started!", SUCCESS)
        return Ok(doc)

    async def view_details(self, doc_id: Optional[int]) -> Result:
        denied = await self._require_user("Please login to view details")
        if denied:
            return denied
        doc = self._find(doc_id)
        if doc is None:
            self.notify("Documentary not found", ERROR)
            return Failed(LookupError(doc_id))
        self.state.selected_id = doc_id
        self.render()
        return Ok(doc)

    async def close_details(self) -> Result:
        self.state.selected_id = None
        self.render()
        return Ok(None)

    async def filter_category(self, category: Optional[str]) -> Result:
        self.state.category = category or None
        self.refresh_regions()
        if self.state.category:
            self.notify(f"Showing {self.state.category} documentaries", INFO)
        else:
            self.notify("Showing all documentaries", INFO)
        return Ok(self.state.visible_documentaries)

    def _check_documentary_form(self, form: Dict[str, Any]) -> Optional[str]:
        if not all(str(form.get(k) or "").strip() for k in ("title", "description", "category", "image_url")):
            return "Please fill all required fields"
        if not self.policy.is_valid_image(form["image_url"].strip()):
            return "Please enter a valid image URL (jpg, png, gif, etc.)"
        if not self.policy.is_valid_video((form.get("video_url") or "").strip() or None):
            return "Please enter a valid YouTube, Vimeo, or direct video URL"
        if not self.policy.is_valid_pdf((form.get("pdf_url") or "").strip() or None):
            return "Please enter a valid PDF URL"
        return None

    async def add_documentary(self, form: Dict[str, Any]) -> Result:
        denied = self._require_admin()
        if denied:
            return denied
        problem = self._check_documentary_form(form)
        if problem:
            self.notify(problem, ERROR)
            return Failed(ValueError(problem))

        payload = {k: v for k, v in form.items() if v not in (None, "")}
        if "rating" in payload:
            try:
                payload["rating"] = float(payload["rating"])
            except (TypeError, ValueError):
                self.notify("Rating must be a number between 0 and 5", ERROR)
                return Failed(ValueError("rating"))
        try:
            created = await self.api.create_documentary(payload)
        except NetworkError as e:
            if not e.is_unreachable:
                self._admin_session_lost(e)
                self.notify(f"Could not add documentary: {e}", ERROR)
                self.render()
                return Failed(e)
            local = {
                "rating": 4.0,
                **payload,
                "id": next(self._local_ids),
                "downloads": 0,
                "date_added": datetime.now(timezone.utc).isoformat(),
            }
            self.state.documentaries.insert(0, local)
            self.render()
            self.notify("Documentary saved locally; server unreachable.", WARNING)
            return Degraded(local, e)
        self.state.documentaries.insert(0, created)
        self.render()
        self.notify("Documentary added successfully!", SUCCESS)
        return Ok(created)

    async def delete_documentary(self, doc_id: Optional[int]) -> Result:
        denied = self._require_admin()
        if denied:
            return denied
        try:
            data = await self.api.delete_documentary(doc_id)
        except NetworkError as e:
            if not e.is_unreachable:
                self._admin_session_lost(e)
                self.notify(f"Could not delete documentary: {e}", ERROR)
                self.render()
                return Failed(e)
            self.state.documentaries = [d for d in self.state.documentaries if d.get("id") != doc_id]
            self.render()
            self.notify("Documentary removed locally; server unreachable.", WARNING)
            return Degraded(doc_id, e)
        self.state.documentaries = [d for d in self.state.documentaries if d.get("id") != doc_id]
        self.render()
        self.notify("Documentary deleted successfully!", SUCCESS)
        return Ok(data)

    async def edit_documentary(self, doc_id: Optional[int]) -> Result:
        denied = self._require_admin()
        if denied:
            return denied
        self.notify("Edit feature coming soon!", INFO)
        return Failed(NotImplementedError("edit"))

    # ---------- Community actions ----------

    async def submit_comment(self, author: Optional[str], email: Optional[str], text: Optional[str]) -> Result:
        denied = await self._require_user("Please login to post comments")
        if denied:
            return denied
        if not author or not email or not text:
            self.notify("Please fill in all fields", ERROR)
            return Failed(ValueError("missing fields"))
        payload = {"author": author, "email": email, "text": text}
        try:
            created = await self.api.add_comment(payload)
        except NetworkError as e:
            if not e.is_unreachable:
                self.notify(f"Could not post comment: {e}", ERROR)
                return Failed(e)
            local = {
                **payload,
                "id": next(self._local_ids),
                "status": "approved",
                "date_added": datetime.now(timezone.utc).isoformat(),
            }
            self.state.comments.insert(0, local)
            self.refresh_regions()
            self.notify("Comment saved locally; server unreachable.", WARNING)
            return Degraded(local, e)
        if created.get("status") == "pending":
            self.notify("Thanks! Your comment will appear once it is approved.", INFO)
        else:
            self.state.comments.insert(0, created)
            self.refresh_regions()
            self.notify("Comment posted successfully!", SUCCESS)
        return Ok(created)

    async def subscribe(self, plan: Optional[str]) -> Result:
        denied = await self._require_user("Please login to subscribe")
        if denied:
            return denied
        self.notify("Redirecting to subscription page...", INFO)
        return Ok(plan)

    async def donate(self, amount: Optional[int]) -> Result:
        denied = await self._require_user("Please login to make a donation")
        if denied:
            return denied
        self.notify(f"Thank you for your ${amount} donation!", SUCCESS)
        return Ok(amount)

    async def contact(self, values: Dict[str, Any]) -> Result:
        if not all(values.get(k) for k in ("name", "email", "message")):
            self.notify("Please fill in all fields", ERROR)
            return Failed(ValueError("missing fields"))
        self.notify("Message sent successfully! We will get back to you soon.", SUCCESS)
        return Ok(None)
