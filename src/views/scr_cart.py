from textual import on, work
from textual.app import ComposeResult
from textual.containers import Container, Horizontal, HorizontalGroup, VerticalScroll
from textual.events import ScreenResume
from textual.message import Message
from textual.widgets import Button, Label, Rule

from db.models import CartEntry
from utils.messages import CartChangedMessage, ModeSwitchedMessage
from utils.pure import format_price, parse_price
from views.base_screen import BaseScreen
from views.modal_checkout import CheckoutModal
from views.modal_dialog import dialog_confirm


class CartItemActionMessage(Message):
    bubble = True

    def __init__(self, action: str) -> None:
        super().__init__()
        self.action = action


class CartItemActionLabel(Label):
    def action_inc(self):
        self.post_message(CartItemActionMessage("inc"))

    def action_dec(self):
        self.post_message(CartItemActionMessage("dec"))

    def action_remove(self):
        self.post_message(CartItemActionMessage("remove"))


class CartItemWidget(HorizontalGroup):
    def __init__(self, entry: CartEntry):
        super().__init__()
        self.entry = entry

    def compose(self):
        product = self.entry.product
        unit = parse_price(product.price)
        subtotal = format_price(unit * self.entry.quantity) if unit is not None else "-"
        with Container(id="div-cart-item-group"):
            with Container(id="div-item"):
                yield Label(product.name, id="label-item-name")
                yield Label(product.price, id="label-item-price")
                yield Label(f"x{self.entry.quantity}", id="label-item-qty")
                yield Label(subtotal, id="label-item-subtotal")
            with Container(id="div-actions"):
                yield CartItemActionLabel("[@click=dec()]-1[/]", id="link-item-dec")
                yield CartItemActionLabel("[@click=inc()]+1[/]", id="link-item-inc")
                yield CartItemActionLabel(
                    "[@click=remove()]Remove[/]", id="link-item-remove"
                )

    @on(CartItemActionMessage)
    def handle_item_action(self, message: CartItemActionMessage):
        message.stop()
        self.apply_action(message.action)

    @work()
    async def apply_action(self, action: str):
        cart = self.app.state.cart
        pid = self.entry.product_id
        if action == "inc":
            await cart.adjust_quantity(pid, 1)
        elif action == "dec":
            await cart.adjust_quantity(pid, -1)
        else:
            await cart.remove_from_cart(pid)
            self.notify("Item removed from cart.", severity="information")
        self.post_message(CartChangedMessage())


class CartScreen(BaseScreen):
    """
    cart entries with quantity controls, clear and checkout
    """

    def __init__(self) -> None:
        super().__init__()

    def compose(self) -> ComposeResult:
        yield from super().compose()
        yield VerticalScroll(id="vertscroll-content")
        yield Label("Total: $0.00", id="label-cart-total")
        yield Rule(line_style="dashed")
        with Horizontal(id="hort-buttons"):
            yield Button("Clear Cart", id="btn-clear-cart")
            yield Button("Checkout", id="btn-checkout", variant="primary")

    async def on_mount(self):
        self.handle_cart_change()

    @on(CartChangedMessage)
    @on(ModeSwitchedMessage)
    @on(ScreenResume)
    @work(exclusive=True)  # must be exclusive, two renders would mount duplicates
    async def handle_cart_change(self):
        cart = self.app.state.cart
        entries = sorted(cart.entries(), key=lambda e: e.product_id)

        content = self.query_one("#vertscroll-content")
        shown = sorted(
            (c.entry for c in content.children if isinstance(c, CartItemWidget)),
            key=lambda e: e.product_id,
        )
        if shown != entries or not entries:
            await content.remove_children()
            if entries:
                await content.mount_all([CartItemWidget(e) for e in entries])
                content.remove_class("no-items")
            else:
                await content.mount(
                    Label("Your cart is empty.", id="label-empty-cart")
                )
                content.add_class("no-items")

        self.query_one("#label-cart-total", Label).update(
            f"Total: {format_price(cart.cart_total())}"
        )
        self.query_one("#btn-clear-cart", Button).display = bool(entries)

    @on(Button.Pressed, "#btn-clear-cart")
    @work()
    async def handle_clear_cart(self) -> None:
        result = await self.app.state.cart.clear_cart(
            dialog_confirm(self.app, tone="error")
        )
        if result:
            self.notify(result.message)
            self.post_message(CartChangedMessage())
        elif result.message:
            self.notify(result.message, severity="warning")

    @on(Button.Pressed, "#btn-checkout")
    @work()
    async def handle_checkout(self) -> None:
        if self.app.state.cart.is_empty():
            self.app.notify(
                "Your cart is empty. Please add items before checking out.",
                severity="warning",
            )
            return

        await self.app.push_screen_wait(CheckoutModal())
        self.post_message(CartChangedMessage())
