import json
import os
from unittest import mock

from db import database as db_database
from db.database import KeyValueStore
from db.repositories import CartRepository, SessionRepository, UserRepository

from store_case import StoreTestCase


class KeyValueStoreTestCase(StoreTestCase):
    # ---------- adapter ----------

    async def test_get_set_remove(self):
        self.assertIsNone(await self.store.get("missing"))

        await self.store.set("greeting", "hello")
        self.assertEqual(await self.store.get("greeting"), "hello")

        await self.store.set("greeting", "bye")
        self.assertEqual(await self.store.get("greeting"), "bye")

        await self.store.remove("greeting")
        self.assertIsNone(await self.store.get("greeting"))

        # removing an absent key is fine
        await self.store.remove("greeting")

    async def test_values_survive_a_new_handle(self):
        await self.store.set("cart", "{}")
        other = KeyValueStore(self.db_path)
        self.assertEqual(await other.get("cart"), "{}")

    async def test_keys_and_clear(self):
        await self.store.set("b", "2")
        await self.store.set("a", "1")
        self.assertEqual(await self.store.keys(), ["a", "b"])
        await self.store.clear()
        self.assertEqual(await self.store.keys(), [])

    async def test_only_strings_are_stored(self):
        with self.assertRaises(TypeError):
            await self.store.set("nextUserId", 2)

    async def test_unicode_round_trips(self):
        await self.store.set("name", "Zoë – 東京")
        self.assertEqual(await self.store.get("name"), "Zoë – 東京")

    async def test_connect_creates_parent_directory_and_table(self):
        nested = os.path.join(self.temp_dir.name, "a", "b", "store.sqlite")
        async with db_database.connect(nested) as conn:
            cur = await conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name='kv';"
            )
            row = await cur.fetchone()
            await cur.close()
        self.assertIsNotNone(row)
        self.assertTrue(os.path.exists(nested))

    async def test_store_recovers_after_file_is_deleted(self):
        await self.store.set("cart", "{}")
        os.remove(self.db_path)

        self.assertIsNone(await self.store.get("cart"))
        await self.store.set("cart", '{"a": 1}')
        self.assertEqual(await self.store.get("cart"), '{"a": 1}')

    async def test_connection_closed_when_setup_fails(self):
        closed = []
        real_connect = db_database.aiosqlite.connect

        async def tracking_connect(path):
            conn = await real_connect(path)
            real_close = conn.close

            async def close():
                closed.append(path)
                await real_close()

            conn.close = close
            return conn

        async def broken_init(conn):
            raise RuntimeError("disk full")

        nested = os.path.join(self.temp_dir.name, "fresh.sqlite")
        with mock.patch.object(
            db_database.aiosqlite, "connect", tracking_connect
        ), mock.patch.object(db_database, "_init_db", broken_init):
            with self.assertRaises(RuntimeError):
                async with db_database.connect(nested):
                    pass
        self.assertEqual(closed, [nested])

    # ---------- repositories ----------

    async def test_user_repository_defaults(self):
        repo = UserRepository(self.store)
        self.assertFalse(await repo.exists())
        self.assertEqual(await repo.load(), [])
        self.assertEqual(await repo.load_next_id(), 1)

        await self.store.set("nextUserId", "not-a-number")
        self.assertEqual(await repo.load_next_id(), 1)

        await repo.save([])
        self.assertTrue(await repo.exists())

    async def test_malformed_json_is_treated_as_absent(self):
        await self.store.set("users", "{not json")
        await self.store.set("cart", "[1, 2")
        self.assertEqual(await UserRepository(self.store).load(), [])
        self.assertEqual(await CartRepository(self.store).load(), {})

    async def test_cart_repository_drops_bad_entries(self):
        await self.store.set(
            "cart",
            json.dumps(
                {
                    "feat1": {
                        "name": "23 Legends Hoodie",
                        "image": "x.jpeg",
                        "price": "$99.99",
                        "category": "featured",
                        "quantity": 2,
                    },
                    "feat2": {"name": "Zero", "price": "$1.00", "quantity": 0},
                    "feat3": {"name": "No quantity"},
                    "feat4": "garbage",
                }
            ),
        )
        cart = await CartRepository(self.store).load()
        self.assertEqual(list(cart), ["feat1"])
        self.assertEqual(cart["feat1"].quantity, 2)
        self.assertEqual(cart["feat1"].product.id, "feat1")

    async def test_session_repository_reads_flag_literally(self):
        repo = SessionRepository(self.store)
        session = await repo.load()
        self.assertFalse(session.logged_in_flag)
        self.assertIsNone(session.current_user_id)

        await self.store.set("isLoggedIn", "TRUE")
        self.assertFalse((await repo.load()).logged_in_flag)

        await self.store.set("isLoggedIn", "true")
        await self.store.set("currentUserId", "7")
        session = await repo.load()
        self.assertTrue(session.logged_in_flag)
        self.assertEqual(session.current_user_id, 7)
