import asyncio

from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.events import ScreenResume
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label, ListItem, ListView, Markdown

from utils.messages import UserLogoutMessage
from utils.pure import generate_markdown_table
from views.modal_dialog import QuitDialogModal, dialog_confirm


class Sidebar(Container):
    init_mode = ""

    def __init__(self) -> None:
        super().__init__()
        self._reload_lock = asyncio.Lock()

    def compose(self) -> ComposeResult:
        yield Label("User Info", id="label-info-1")
        yield Markdown("", id="md-userinfo")
        yield Label("Cart: 0 item(s)", id="label-cart-count")
        yield Button("Log out", id="btn-logout", variant="error")
        yield Label("Menu", id="label-info-2")
        yield ListView(id="list-menu")

    async def on_mount(self):
        await self.reload()

    async def reload(self) -> None:
        """Show whoever is logged in now; modes outlive a single login."""
        async with self._reload_lock:
            await self._reload()

    async def _reload(self) -> None:
        self.init_mode = self.app.current_mode
        self.refresh_cart_count()

        user = await self.app.state.session.get_current_user()
        if user is None:
            return

        table_rows = [
            ["Username", user.username],
            ["Name", user.full_name],
            ["Role", "Administrator" if user.is_admin else "Customer"],
        ]
        md_table_str = generate_markdown_table(None, table_rows, ["l", "l"])
        await self.query_one(Markdown).update(md_table_str)

        modes = self.app.ADMIN_MODES if user.is_admin else self.app.CUSTOMER_MODES
        list_menu: ListView = self.query_one("#list-menu")
        await list_menu.clear()
        await list_menu.extend(
            [ListItem(Label(v), name=k) for k, v in modes.items()]
        )
        self.highlight_item(self.init_mode)

    def refresh_cart_count(self) -> None:
        count = self.app.state.cart.cart_count()
        self.query_one("#label-cart-count", Label).update(f"Cart: {count} item(s)")

    async def on_list_view_selected(self, event: ListView.Selected):
        selected_mode = event.item.name
        self.highlight_item(self.init_mode)
        if self.app.current_mode != selected_mode:
            self.app.open_mode(selected_mode)

    @on(Button.Pressed, "#btn-logout")
    @work(exclusive=True)
    async def handle_logout(self):
        if await self.app.state.session.logout(dialog_confirm(self.app)):
            self.post_message(UserLogoutMessage())

    def highlight_item(self, mode_str: str):
        list_menu = self.query_one("#list-menu")
        for item in list_menu.children:
            item.highlighted = item.name == mode_str


class BaseScreen(Screen):
    """
    Inherited by all screens, contains common elements like
    headers, footers, sidebar, and keybindings.
    """

    BINDINGS = [
        Binding("ctrl+z", "quit", "Quit App", show=True),
    ]

    def __init__(self):
        super().__init__()

        self.configure()

    def configure(
        self,
        header_sub_title: str = "Storefront",
        show_sidebar: bool = True,
    ) -> None:
        """
        configure behavior of the base screen
        """
        self.app.title = "Storefront"
        self.sub_title = header_sub_title
        for k, v in self.app.MODES.items():
            if isinstance(self, v) and k in self.app.ADMIN_MODES:
                self.sub_title = self.app.ADMIN_MODES[k]

        self._show_sidebar = show_sidebar

    def compose(self) -> ComposeResult:
        if self._show_sidebar:
            yield Sidebar()
        yield Header()
        yield Footer(show_command_palette=False)

    @on(ScreenResume)
    async def handle_screen_resume(self):
        for sidebar in self.query(Sidebar):
            await sidebar.reload()

    @work()
    async def action_quit(self):
        await self.app.push_screen_wait(QuitDialogModal())
