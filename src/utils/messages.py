from textual.message import Message


class QuitRequestedMessage(Message):
    """
    broadcasted when the user confirmed quitting the app
    """

    bubble = True


class UserLogoutMessage(Message):
    """
    broadcasted after the session manager ended the session
    """

    bubble = True


class UserLoginMessage(Message):
    """
    Fired after login or signup succeeded, so the app can leave the login screen
    """

    bubble = True


class CartChangedMessage(Message):
    """
    Fired whenever the cart manager mutated the cart.
    Cart screen re-renders, sidebar refreshes its item count.

    Post it at App level when sent from a modal.
    """

    bubble = True


class PaymentCompletedMessage(Message):
    """
    Fired when the simulated payment went through and the cart was emptied
    """

    bubble = True


class LoginRequiredMessage(Message):
    """
    Fired when an action needs a logged-in user.
    target: the mode to return to once the user has logged in
    """

    bubble = True

    def __init__(self, target: str) -> None:
        super().__init__()
        self.target = target


class ModeSwitchedMessage(Message):
    """
    fired whenever switch_mode is called
    must be fired from app level
    """

    bubble = True

    def __init__(self, old_mode: str, new_mode: str) -> None:
        super().__init__()
        self.old_mode = old_mode
        self.new_mode = new_mode
