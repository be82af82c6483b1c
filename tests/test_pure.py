import os
import unittest
from decimal import Decimal
from unittest import mock

from db.catalog import PRODUCTS, ProductCatalog
from db.models import Product
from utils.config import Settings, load_settings
from utils.pure import (
    check_signup_fields,
    derive_username,
    format_price,
    generate_markdown_table,
    is_valid_email,
    parse_price,
)


class PriceTestCase(unittest.TestCase):
    def test_parse_price(self):
        self.assertEqual(parse_price("$99.99"), Decimal("99.99"))
        self.assertEqual(parse_price("$1,299.99"), Decimal("1299.99"))
        self.assertEqual(parse_price("£12"), Decimal("12"))
        self.assertEqual(parse_price("7.50"), Decimal("7.50"))
        self.assertIsNone(parse_price(""))
        self.assertIsNone(parse_price("free"))
        self.assertIsNone(parse_price("$NaN"))

    def test_format_price(self):
        self.assertEqual(format_price(Decimal("0")), "$0.00")
        self.assertEqual(format_price(Decimal("25.5")), "$25.50")
        self.assertEqual(format_price(Decimal("1299.5")), "$1,299.50")

    def test_catalog_prices_all_parse(self):
        for product in PRODUCTS:
            self.assertIsNotNone(parse_price(product.price), product.id)


class SignupFieldsTestCase(unittest.TestCase):
    def test_derive_username(self):
        self.assertEqual(derive_username("Jane Doe"), "janedoe")
        self.assertEqual(derive_username("  Mary\tAnn  Lee "), "maryannlee")

    def test_is_valid_email(self):
        self.assertTrue(is_valid_email("jane@example.com"))
        self.assertFalse(is_valid_email("jane@example"))
        self.assertFalse(is_valid_email("jane example.com"))

    def test_check_signup_fields(self):
        ok = ("Jane Doe", "jane@example.com", "555", "secret", "secret")
        self.assertIsNone(check_signup_fields(*ok))

        self.assertEqual(
            check_signup_fields("", "jane@example.com", "555", "secret", "secret"),
            "Please fill in all fields.",
        )
        self.assertEqual(
            check_signup_fields("Jane", "jane@example.com", "555", "secret", "other"),
            "Passwords do not match!",
        )
        self.assertEqual(
            check_signup_fields("Jane", "jane@example.com", "555", "abc", "abc"),
            "Password must be at least 4 characters long.",
        )
        self.assertEqual(
            check_signup_fields("Jane", "not-an-email", "555", "secret", "secret"),
            "Please enter a valid email address.",
        )


class MarkdownTableTestCase(unittest.TestCase):
    def test_table(self):
        table = generate_markdown_table(
            ["Item", "Qty"], [["Hoodie", 2]], aligns=["l", "r"]
        )
        self.assertEqual(
            table, "| Item | Qty |\n| :--- | ---: |\n| Hoodie | 2 |"
        )

    def test_first_row_as_header(self):
        table = generate_markdown_table(None, [["A", "B"], ["1", "2"]])
        self.assertTrue(table.startswith("| A | B |\n| :---: | :---: |"))

    def test_empty_and_mismatched(self):
        self.assertEqual(generate_markdown_table(["A"], []), "")
        with self.assertRaises(ValueError):
            generate_markdown_table(["A", "B"], [["1", "2"]], aligns=["l"])


class ProductCatalogTestCase(unittest.TestCase):
    def setUp(self):
        self.catalog = ProductCatalog()

    def test_lookup(self):
        self.assertEqual(len(self.catalog), len(PRODUCTS))
        self.assertEqual(self.catalog.get("feat1").name, "23 Legends Hoodie")
        self.assertIsNone(self.catalog.get("missing"))

    def test_categories_keep_catalog_order(self):
        self.assertEqual(self.catalog.categories()[0], "featured")
        self.assertIn("sneakers", self.catalog.categories())
        sneakers = self.catalog.by_category("Sneakers")
        self.assertEqual(len(sneakers), 6)
        self.assertEqual(sneakers[0].id, "sneak1")

    def test_search(self):
        self.assertEqual(self.catalog.search(""), [])
        self.assertEqual(self.catalog.search("   "), [])
        hits = self.catalog.search("nike")
        self.assertIn("sneak1", [p.id for p in hits])
        # name or category: the men's high-tops match by name
        ids = [p.id for p in self.catalog.search("SNEAKERS")]
        self.assertIn("men1", ids)
        self.assertIn("sneak1", ids)

    def test_browse_combines_category_and_search(self):
        self.assertEqual(self.catalog.browse(), self.catalog.all())
        self.assertEqual(
            self.catalog.browse("", "men"), self.catalog.by_category("men")
        )
        # "sneakers" hits men1 by name and every sneak* by category
        ids = [p.id for p in self.catalog.browse("sneakers", "men")]
        self.assertEqual(ids, ["men1"])
        self.assertEqual(self.catalog.browse("nike", "women"), [])
        self.assertEqual(
            [p.id for p in self.catalog.browse("  nike ")], ["sneak1"]
        )

    def test_duplicate_ids_are_rejected(self):
        product = Product("x", "X", "", "$1.00", "misc")
        with self.assertRaises(ValueError):
            ProductCatalog([product, product])


class SettingsTestCase(unittest.TestCase):
    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(load_settings(), Settings())

    def test_environment_overrides(self):
        env = {
            "STOREFRONT_DB_PATH": "/tmp/shop.sqlite",
            "STOREFRONT_CHECKOUT_DELAY": "0.25",
            "STOREFRONT_BCRYPT_ROUNDS": "6",
            "STOREFRONT_ADMIN_NAME": "Shop Owner",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = load_settings()
        self.assertEqual(settings.db_path, "/tmp/shop.sqlite")
        self.assertEqual(settings.checkout_delay, 0.25)
        self.assertEqual(settings.bcrypt_rounds, 6)
        self.assertEqual(settings.admin_name, "Shop Owner")
        self.assertEqual(settings.admin_email, Settings().admin_email)

    def test_bad_values_fall_back(self):
        env = {
            "STOREFRONT_CHECKOUT_DELAY": "soon",
            "STOREFRONT_BCRYPT_ROUNDS": "99",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = load_settings()
        self.assertEqual(settings.checkout_delay, Settings().checkout_delay)
        self.assertEqual(settings.bcrypt_rounds, Settings().bcrypt_rounds)
