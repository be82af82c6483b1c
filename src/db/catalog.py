# read-only product catalog
from typing import Dict, Iterable, List, Optional, Tuple

from db.models import Product


def _p(pid: str, name: str, price: str, category: str) -> Product:
    return Product(
        id=pid, name=name, image=f"images/{pid}.jpeg", price=price, category=category
    )


PRODUCTS: Tuple[Product, ...] = (
    # featured collections
    _p("feat1", "23 Legends Hoodie", "$99.99", "featured"),
    _p("feat2", "Louis Vuitton Shoes", "$199.99", "featured"),
    _p("feat3", "Ladies Gem Collection", "$149.99", "featured"),
    # new arrivals
    _p("new1", "JORDANS 13 Retro", "$67.20", "new arrivals"),
    _p("new2", "Men's Letter Print Drawstring Hoodie", "$89.00", "new arrivals"),
    _p("new3", "JORDANS m2", "$120.00", "new arrivals"),
    _p("new4", "Blouse wc2", "$90.00", "new arrivals"),
    _p("new5", "Sweatpants wc1", "$86.99", "new arrivals"),
    _p("new6", "Men's American Baseball Jacket", "$120.00", "new arrivals"),
    # men
    _p("men1", "High-Top L Sneakers", "$130.00", "men"),
    _p("men2", "Men's T-Shirt", "$67.00", "men"),
    _p("men3", "Painted AF1 Shoes", "$119.99", "men"),
    _p("men_p1", "Men T-Shirt", "$35.00", "men"),
    _p("men_p2", "Men's Jeans", "$75.00", "men"),
    _p("men_p3", "Men's Jacket", "$120.00", "men"),
    _p("men_p4", "Men's Hoodie", "$60.00", "men"),
    _p("men_p5", "Men's Shorts", "$40.00", "men"),
    _p("men_p6", "Men's Sweatshirt", "$55.00", "men"),
    # women
    _p("women1", "Women's Skirt", "$40.00", "women"),
    _p("women2", "Women's Shoes w2", "$54.00", "women"),
    _p("women3", "Women's Dress", "$145.00", "women"),
    _p("women_p1", "Women's Dress", "$80.00", "women"),
    _p("women_p2", "Women's Skirt", "$45.00", "women"),
    _p("women_p3", "Women's Blouse", "$50.00", "women"),
    _p("women_p4", "Women's Pants", "$70.00", "women"),
    _p("women_p5", "Women's Sweater", "$65.00", "women"),
    _p("women_p6", "Women's Jumpsuit", "$90.00", "women"),
    # sneakers
    _p("sneak1", "Nike Air", "$120.50", "sneakers"),
    _p("sneak2", "Sport Runner Sneakers", "$110.00", "sneakers"),
    _p("sneak3", "High-Top Vintage Sneakers", "$130.00", "sneakers"),
    _p("sneak4", "Casual Canvas Sneakers", "$70.00", "sneakers"),
    _p("sneak5", "Lifestyle Knit Sneakers", "$100.00", "sneakers"),
    _p("sneak6", "Retro Jogger Sneakers", "$95.00", "sneakers"),
)


class ProductCatalog:
    """Lookup over an immutable list of products, in catalog order."""

    def __init__(self, products: Iterable[Product] = PRODUCTS) -> None:
        self._products: Tuple[Product, ...] = tuple(products)
        self._by_id: Dict[str, Product] = {}
        for product in self._products:
            if product.id in self._by_id:
                raise ValueError(f"Duplicate product id '{product.id}'.")
            self._by_id[product.id] = product

    def __len__(self) -> int:
        return len(self._products)

    def get(self, product_id: str) -> Optional[Product]:
        return self._by_id.get(product_id)

    def all(self) -> List[Product]:
        return list(self._products)

    def categories(self) -> List[str]:
        seen: List[str] = []
        for product in self._products:
            if product.category not in seen:
                seen.append(product.category)
        return seen

    def by_category(self, category: str) -> List[Product]:
        wanted = category.strip().lower()
        return [p for p in self._products if p.category.lower() == wanted]

    def browse(
        self, query: str = "", category: Optional[str] = None
    ) -> List[Product]:
        """What the catalog page lists: optionally one category, then a search."""
        products = self.by_category(category) if category else self.all()
        if not (query or "").strip():
            return products
        hits = {p.id for p in self.search(query)}
        return [p for p in products if p.id in hits]

    def search(self, query: str) -> List[Product]:
        """Case-insensitive substring match on name or category."""
        needle = (query or "").strip().lower()
        if not needle:
            return []
        return [
            p
            for p in self._products
            if needle in p.name.lower() or needle in p.category.lower()
        ]
