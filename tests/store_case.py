import os
import tempfile
import unittest

from db.database import KeyValueStore
from utils.config import Settings
from utils.state import GlobalState


class StoreTestCase(unittest.IsolatedAsyncioTestCase):
    """Points every service at a throwaway sqlite file."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self.temp_dir.name, "test.sqlite")
        self.settings = Settings(
            db_path=self.db_path,
            checkout_delay=0.01,
            bcrypt_rounds=4,  # bcrypt minimum, keeps hashing fast
            admin_password="admin-pw",
        )
        self.store = KeyValueStore(self.db_path)

    def tearDown(self):
        self.temp_dir.cleanup()

    def make_state(self, **kwargs) -> GlobalState:
        return GlobalState(settings=self.settings, **kwargs)

    async def login_new_user(self, state: GlobalState, full_name="Jane Doe"):
        email = full_name.lower().replace(" ", ".") + "@example.com"
        result = await state.users.add_user(full_name, email, "555-0100", "secret")
        await state.session.set_logged_in(True, result.value)
        return result.value
