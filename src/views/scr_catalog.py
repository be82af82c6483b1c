from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import DataTable, Input, Select

from utils.errors import ErrorKind
from utils.messages import CartChangedMessage, LoginRequiredMessage
from views.base_screen import BaseScreen


class CatalogScreen(BaseScreen):
    """
    product list with search and a category filter; Enter adds the highlighted product to the cart
    """

    # only shown in the footer, Enter selects the row
    BINDINGS = [
        Binding("fn+shift+1", "noop", "Add to Cart", show=True, key_display="⏎"),
    ]

    def __init__(self):
        super().__init__()

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Horizontal(id="hort-catalog-filters"):
            yield Input(
                id="input-search",
                placeholder="Search by name or category, e.g. sneakers...",
            )
            yield Select(
                [(c.title(), c) for c in self.app.state.catalog.categories()],
                prompt="All categories",
                id="select-category",
            )
        yield DataTable(id="table-catalog")

    def on_mount(self):
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("ID", "Name", "Category", "Price")

        self.show_products()
        self.query_one("#input-search").focus()

    def on_input_changed(self, message: Input.Changed) -> None:
        if message.input.id == "input-search":
            self.show_products()

    @on(Select.Changed, "#select-category")
    def handle_category_changed(self) -> None:
        self.show_products()

    def show_products(self) -> None:
        query = self.query_one("#input-search", Input).value
        category = self.query_one("#select-category", Select).value
        products = self.app.state.catalog.browse(
            query, category if isinstance(category, str) else None
        )

        table = self.query_one(DataTable)
        table.clear()
        for p in products:
            table.add_row(p.id, p.name, p.category, p.price, key=p.id)

    def action_noop(self) -> None:
        pass

    @on(DataTable.RowSelected, "#table-catalog")
    def handle_row_selected(self, event: DataTable.RowSelected) -> None:
        self.handle_add_to_cart(event.row_key.value)

    @work(exclusive=True)
    async def handle_add_to_cart(self, product_id: str) -> None:
        result = await self.app.state.cart.add_to_cart(product_id)
        if result:
            self.notify(result.message)
            self.app.post_message(CartChangedMessage())
        elif result.error is ErrorKind.NOT_AUTHENTICATED:
            self.notify(result.message, severity="warning")
            self.app.post_message(LoginRequiredMessage("catalog"))
        else:
            self.notify(result.message, severity="error")

    @on(Input.Submitted, "#input-search")
    def handle_search_submitted(self) -> None:
        self.query_one(DataTable).focus()
