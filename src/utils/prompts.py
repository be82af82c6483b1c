import inspect
from typing import Awaitable, Callable, Union

# asks the user a yes/no question, e.g. a dialog; may be sync or async
Confirm = Callable[[str], Union[bool, Awaitable[bool]]]


async def ask(confirm: Confirm, question: str) -> bool:
    answer = confirm(question)
    if inspect.isawaitable(answer):
        answer = await answer
    return bool(answer)
