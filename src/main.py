from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import LoadingIndicator

from utils.config import load_settings
from utils.logger import get_logger
from utils.messages import (
    CartChangedMessage,
    LoginRequiredMessage,
    ModeSwitchedMessage,
    PaymentCompletedMessage,
    QuitRequestedMessage,
    UserLogoutMessage,
)
from utils.state import GlobalState
from views.base_screen import Sidebar
from views.scr_cart import CartScreen
from views.scr_catalog import CatalogScreen
from views.scr_login import LoginScreen
from views.scr_users import UsersScreen

_logger = get_logger(__name__)


class StorefrontApp(App):
    BINDINGS = [
        Binding("ctrl+t", "switch_light", "Toggle Theme", show=True),
    ]

    MODES = {
        "catalog": CatalogScreen,
        "cart": CartScreen,
        "users": UsersScreen,
    }

    CUSTOMER_MODES = {
        "catalog": "Shop",
        "cart": "Cart",
    }
    ADMIN_MODES = {**CUSTOMER_MODES, "users": "Registered Users"}

    # every mode needs a logged-in user; these need an administrator too
    ADMIN_ONLY_MODES = {"users"}
    ENTRY_MODE = "catalog"

    CSS_PATH = "styles/storefront.tcss"

    state: GlobalState

    def __init__(self, state: GlobalState | None = None):
        super().__init__()
        self.state = state or GlobalState(settings=load_settings())

    def compose(self) -> ComposeResult:
        yield LoadingIndicator()

    async def on_mount(self) -> None:
        await self.state.start()
        self.main_flow()

    def action_switch_light(self):
        if self.theme == "textual-dark":
            self.theme = "solarized-light"
        else:
            self.theme = "textual-dark"
        self.notify(f"Theme changed to {self.theme}")

    @on(UserLogoutMessage)
    def handle_user_logout(self):
        self.notify("Logout successful.")
        self.main_flow()

    @on(LoginRequiredMessage)
    def handle_login_required(self, message: LoginRequiredMessage):
        self.state.session.remember_redirect(message.target)
        self.main_flow()

    @on(CartChangedMessage)
    def handle_cart_changed(self):
        for sidebar in self.screen.query(Sidebar):
            sidebar.refresh_cart_count()

    @on(PaymentCompletedMessage)
    def handle_payment_completed(self):
        _logger.info("Order paid, cart emptied.")

    @on(QuitRequestedMessage)
    def handle_quit(self):
        self.exit()

    @work(exclusive=True, group="navigation")
    async def open_mode(self, mode: str) -> None:
        """Switch to a mode, guarding pages that need a (admin) login."""
        if not await self.state.session.is_logged_in():
            self.state.session.remember_redirect(mode)
            self.notify("Please login or signup to access this page.", severity="warning")
            self.main_flow()
            return

        if mode in self.ADMIN_ONLY_MODES:
            user = await self.state.session.get_current_user()
            if user is None or not user.is_admin:
                self.notify("Administrators only.", severity="error")
                mode = self.ENTRY_MODE

        if mode not in self.MODES:
            _logger.warning(f"Unknown mode '{mode}', showing the catalog.")
            mode = self.ENTRY_MODE

        if mode == self.current_mode:
            return
        self.post_message(ModeSwitchedMessage(self.current_mode, mode))
        await self.switch_mode(mode)

    @work(exclusive=True, group="login")
    async def main_flow(self):
        if not await self.state.session.is_logged_in():
            await self.push_screen_wait(LoginScreen())
        target = self.state.session.pop_redirect() or self.ENTRY_MODE
        self.open_mode(target)


def run() -> None:
    app = StorefrontApp()
    app.run()


if __name__ == "__main__":
    run()
