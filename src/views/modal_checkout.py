from textual import events, on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, MarkdownViewer

from utils.messages import CartChangedMessage, PaymentCompletedMessage
from utils.pure import format_price, generate_markdown_table, parse_price


class CheckoutModal(ModalScreen[bool]):
    """
    Order summary plus a card form, paid through the checkout simulator.
    Dismisses with True once the payment went through and the cart was emptied.
    """

    def compose(self) -> ComposeResult:
        with Vertical():
            yield MarkdownViewer("", show_table_of_contents=False)
            yield Label("Card Number")
            yield Input(placeholder="1234 5678 9012 3456", id="input-card-number")
            with Horizontal(id="hort-card-meta"):
                yield Input(placeholder="MM/YY", id="input-expiry-date")
                yield Input(placeholder="CVC", password=True, id="input-cvc")
            yield Label("Name on Card")
            yield Input(placeholder="Jane Doe", id="input-card-name")
            yield Label("", id="label-payment-message")
            with Horizontal():
                yield Button("Go Back", id="btn-quit")
                yield Button("Pay", id="btn-submit", variant="primary")

    async def on_mount(self):
        cart = self.app.state.cart
        headers = ["Product", "Unit Price", "Quantity", "Subtotal"]
        rows = []
        for entry in cart.entries():
            unit = parse_price(entry.product.price)
            subtotal = format_price(unit * entry.quantity) if unit is not None else "-"
            rows.append([entry.product.name, entry.product.price, entry.quantity, subtotal])
        md = "### Order Summary\n\n"
        md += generate_markdown_table(headers, rows, ["l", "r", "c", "r"])
        md += f"\n\n**Total:** {format_price(cart.cart_total())}"
        await self.query_one(MarkdownViewer).document.update(md)
        self.query_one("#input-card-number").focus()

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape" and not self.app.state.checkout.pending:
            self.dismiss(False)

    def _value(self, selector: str) -> str:
        return self.query_one(selector, Input).value.strip()

    @on(Button.Pressed, "#btn-submit")
    @work()
    async def handle_submit(self):
        message = self.query_one("#label-payment-message", Label)
        message.update("Processing your payment...")

        result = await self.app.state.checkout.submit_payment(
            self._value("#input-card-number").replace(" ", ""),
            self._value("#input-expiry-date"),
            self._value("#input-cvc"),
            self._value("#input-card-name"),
        )
        if not result:
            message.update(result.message)
            self.notify(result.message, severity="error")
            return

        await self.app.state.cart.empty()
        self.app.post_message(CartChangedMessage())
        self.app.post_message(PaymentCompletedMessage())
        self.notify(result.message)
        self.dismiss(True)

    @on(Button.Pressed, "#btn-quit")
    def handle_quit(self):
        if self.app.state.checkout.pending:
            self.notify("Please wait for the payment to finish.", severity="warning")
            return
        self.dismiss(False)
