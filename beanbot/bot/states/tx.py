"""FSM states for guided transaction entry."""

from aiogram.fsm.state import State, StatesGroup


class TxStates(StatesGroup):
    """A transaction is open and waits for the next field."""

    collecting = State()
