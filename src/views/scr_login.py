from textual import on, work
from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.events import Key
from textual.widgets import Button, Input, Label, TabbedContent, TabPane

from utils.messages import UserLoginMessage
from utils.pure import check_signup_fields
from views.base_screen import BaseScreen
from views.modal_dialog import QuitDialogModal, SimpleDialogModal


class LoginScreen(BaseScreen):
    """
    Entry screen. Dismissed once a user is logged in, either by logging in
    with username / full name / email, or by signing up.
    """

    def __init__(self):
        super().__init__()
        self.configure(header_sub_title="Login", show_sidebar=False)

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with TabbedContent(id="super-tab-loginscr"):
            with TabPane("Login", id="tab-login"):
                with Vertical(id="div-login"):
                    yield Label("Username or Email")
                    yield Input(placeholder="janedoe", id="input-login-id")
                    yield Label("Password")
                    yield Input(
                        placeholder="*********", password=True, id="input-login-pwd"
                    )
                    with Horizontal(id="div-login-btns"):
                        yield Button("Quit", id="btn-quit")
                        yield Button("Login", id="btn-login", variant="primary")

            with TabPane("Sign up", id="tab-signup"):
                with Vertical(id="div-reg"):
                    yield Label("Full Name")
                    yield Input(placeholder="Jane Doe", id="input-reg-name")
                    yield Label("Email")
                    yield Input(placeholder="user@example.com", id="input-reg-email")
                    yield Label("Mobile Phone")
                    yield Input(placeholder="+1 555 0100", id="input-reg-phone")
                    yield Label("Password")
                    yield Input(
                        placeholder="*********", password=True, id="input-reg-pwd"
                    )
                    yield Label("Confirm Password")
                    yield Input(
                        placeholder="*********",
                        password=True,
                        id="input-reg-pwd-confirm",
                    )
                    with Container(id="div-reg-btns"):
                        yield Button("Sign up", id="btn-reg", variant="primary")

    def on_mount(self):
        self.query_one("#input-login-id").focus()

    def on_key(self, event: Key) -> None:
        if event.key != "enter":
            return
        if self.focused == self.query_one("#input-login-pwd"):
            self.handle_login_submit()
        elif self.focused == self.query_one("#input-reg-pwd-confirm"):
            self.handle_registration_submit()

    @on(Button.Pressed, "#btn-login")
    @work(exclusive=True)
    async def handle_login_submit(self) -> None:
        identifier = self.query_one("#input-login-id", Input).value.strip()
        pwd = self.query_one("#input-login-pwd", Input).value

        if not identifier or not pwd:
            self.notify("Please enter both username and password.", severity="error")
            return

        result = await self.app.state.users.validate_login(identifier, pwd)
        if result:
            user = result.value
            await self.app.state.session.set_logged_in(True, user)
            self.notify(f"Hello {user.full_name}!")
            self.app.post_message(UserLoginMessage())
            self.dismiss()
        else:
            self.notify(result.message, severity="error")
            input_login_pwd = self.query_one("#input-login-pwd", Input)
            input_login_pwd.value = ""
            input_login_pwd.focus()
            input_login_pwd.add_class("-invalid")

    @on(Button.Pressed, "#btn-reg")
    @work(exclusive=True)
    async def handle_registration_submit(self) -> None:
        name = self.query_one("#input-reg-name", Input).value.strip()
        email = self.query_one("#input-reg-email", Input).value.strip()
        phone = self.query_one("#input-reg-phone", Input).value.strip()
        pwd = self.query_one("#input-reg-pwd", Input).value
        pwd_confirm = self.query_one("#input-reg-pwd-confirm", Input).value

        problem = check_signup_fields(name, email, phone, pwd, pwd_confirm)
        if problem:
            self.notify(problem, severity="error")
            return

        result = await self.app.state.users.add_user(name, email, phone, pwd)
        if not result:
            self.notify(result.message, severity="error")
            return

        user = result.value
        await self.app.push_screen_wait(
            SimpleDialogModal(
                f"Account created. Your username is '{user.username}'.",
            )
        )
        await self.app.state.session.set_logged_in(True, user)
        self.app.post_message(UserLoginMessage())
        self.dismiss()

    @on(Button.Pressed, "#btn-quit")
    def handle_quit_(self) -> None:
        self.app.push_screen(QuitDialogModal())
