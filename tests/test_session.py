from store_case import StoreTestCase


class SessionManagerTestCase(StoreTestCase):
    async def asyncSetUp(self):
        self.state = self.make_state()
        await self.state.start()
        self.session = self.state.session
        created = await self.state.users.add_user(
            "Jane Doe", "jane@example.com", "555", "secret"
        )
        self.user = created.value

    async def test_starts_logged_out(self):
        self.assertFalse(await self.session.is_logged_in())
        self.assertIsNone(await self.session.get_current_user())

    async def test_login_persists_user_and_flag(self):
        await self.session.set_logged_in(True, self.user)

        self.assertTrue(await self.session.is_logged_in())
        self.assertEqual(await self.session.get_current_user(), self.user)
        self.assertEqual(await self.store.get("isLoggedIn"), "true")
        self.assertEqual(await self.store.get("currentUserId"), str(self.user.id))
        self.assertEqual(await self.store.get("currentUsername"), "janedoe")

    async def test_login_requires_a_user(self):
        with self.assertRaises(ValueError):
            await self.session.set_logged_in(True)
        self.assertIsNone(await self.store.get("isLoggedIn"))

    async def test_turning_off_clears_current_user(self):
        await self.session.set_logged_in(True, self.user)
        await self.session.set_logged_in(False)

        self.assertFalse(await self.session.is_logged_in())
        self.assertEqual(await self.store.get("isLoggedIn"), "false")
        self.assertIsNone(await self.store.get("currentUserId"))
        self.assertIsNone(await self.store.get("currentUsername"))

    async def test_set_current_user(self):
        await self.session.set_current_user(self.user)
        self.assertEqual(await self.session.get_current_user(), self.user)
        # user alone is not a login
        self.assertFalse(await self.session.is_logged_in())

        await self.session.set_current_user(None)
        self.assertIsNone(await self.session.get_current_user())

    async def test_flag_alone_is_not_a_login(self):
        await self.store.set("isLoggedIn", "true")
        self.assertFalse(await self.session.is_logged_in())

    async def test_stale_user_id_is_not_a_login(self):
        await self.store.set("isLoggedIn", "true")
        await self.store.set("currentUserId", "999")
        self.assertFalse(await self.session.is_logged_in())
        self.assertIsNone(await self.session.get_current_user())

        await self.store.set("currentUserId", "abc")
        self.assertFalse(await self.session.is_logged_in())

    async def test_logout_needs_confirmation(self):
        await self.session.set_logged_in(True, self.user)
        questions = []

        def decline(question):
            questions.append(question)
            return False

        self.assertFalse(await self.session.logout(decline))
        self.assertTrue(await self.session.is_logged_in())
        self.assertEqual(questions, ["Are you sure you want to logout?"])

        async def accept(question):
            return True

        self.assertTrue(await self.session.logout(accept))
        self.assertFalse(await self.session.is_logged_in())
        self.assertIsNone(await self.store.get("currentUserId"))

    async def test_redirect_slot_is_read_once(self):
        self.assertIsNone(self.session.pop_redirect())
        self.session.remember_redirect("cart")
        self.session.remember_redirect("catalog")
        self.assertEqual(self.session.pop_redirect(), "catalog")
        self.assertIsNone(self.session.pop_redirect())

    async def test_session_survives_restart(self):
        await self.session.set_logged_in(True, self.user)
        restarted = self.make_state()
        await restarted.start()
        self.assertTrue(await restarted.session.is_logged_in())
        self.assertEqual(
            (await restarted.session.get_current_user()).username, "janedoe"
        )
