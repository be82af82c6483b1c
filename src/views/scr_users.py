from textual import on, work
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.events import ScreenResume
from textual.widgets import DataTable, Label

from views.base_screen import BaseScreen


class UsersScreen(BaseScreen):
    """
    Administrators only: every registered account, passwords left out.
    """

    def __init__(self) -> None:
        super().__init__()

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical():
            yield Label("", id="label-user-count")
            yield DataTable(id="table-users")

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns(
            "ID", "Username", "Full Name", "Email", "Mobile", "Created", "Admin"
        )
        self.handle_reload()

    @on(ScreenResume)
    @work(exclusive=True)
    async def handle_reload(self) -> None:
        users = await self.app.state.users.all_users()

        table = self.query_one(DataTable)
        table.clear()
        for u in users:
            table.add_row(
                u.id,
                u.username,
                u.full_name,
                u.email,
                u.mobile_phone,
                u.created_at.strftime("%Y-%m-%d %H:%M"),
                "yes" if u.is_admin else "",
            )
        self.query_one("#label-user-count", Label).update(
            f"{len(users)} registered user(s)"
        )
