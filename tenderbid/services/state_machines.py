from logging import Logger

from transitions.extensions.asyncio import AsyncMachine
from tenderbid.core.logging_config import logger
from tenderbid.models.bids import Bid
from tenderbid.models.enums import BidStatus, TenderStatus
from tenderbid.models.tenders import Tender
from tenderbid.services.errors import InvalidStatusTransition


class StatusMachine:
    """
    Обёртка над AsyncMachine для строки с колонкой `status`.

    Машина создаётся на один запрос из текущего статуса записи;
    после успешного перехода новый статус записывается обратно в запись.
    """

    entity = "entity"
    states: list[str] = []
    transitions: list[dict] = []
    # целевой статус -> триггер
    status_triggers: dict[str, str] = {}

    def __init__(self, record, log: Logger = logger):
        self.record = record
        self.log = log
        self.machine = AsyncMachine(
            model=self,
            states=self.states,
            transitions=self.transitions,
            initial=record.status,
            auto_transitions=False,
            send_event=True,
            after_state_change="log_state_change",
        )

    async def log_state_change(self, event):
        self.log.info(
            f"{self.entity.capitalize()} {self.record.id} moved "
            f"from {event.transition.source} to {event.transition.dest}"
        )

    def can_move_to(self, status: str) -> bool:
        if status == self.state:
            return True
        trigger = self.status_triggers.get(status)
        return trigger is not None and trigger in self.machine.get_triggers(self.state)

    async def move_to(self, status) -> str:
        target = getattr(status, "value", status)
        if target == self.state:
            return self.state
        if not self.can_move_to(target):
            raise InvalidStatusTransition(f"Cannot move {self.entity} {self.record.id} from {self.state} to {target}")
        await self.trigger(self.status_triggers[target])
        self.record.status = self.state
        return self.state


class TenderStateMachine(StatusMachine):
    entity = "tender"
    states = [status.value for status in TenderStatus]
    transitions = [
        {"trigger": "publish", "source": TenderStatus.CREATED.value, "dest": TenderStatus.PUBLISHED.value},
        {
            "trigger": "close",
            "source": [TenderStatus.CREATED.value, TenderStatus.PUBLISHED.value],
            "dest": TenderStatus.CLOSED.value,
        },
    ]
    status_triggers = {
        TenderStatus.PUBLISHED.value: "publish",
        TenderStatus.CLOSED.value: "close",
    }

    def __init__(self, tender: Tender, log: Logger = logger):
        super().__init__(tender, log)


class BidStateMachine(StatusMachine):
    entity = "bid"
    states = [status.value for status in BidStatus]
    _open = [BidStatus.CREATED.value, BidStatus.PUBLISHED.value]
    transitions = [
        {"trigger": "publish", "source": BidStatus.CREATED.value, "dest": BidStatus.PUBLISHED.value},
        {"trigger": "cancel", "source": _open, "dest": BidStatus.CANCELED.value},
        {"trigger": "approve", "source": _open, "dest": BidStatus.APPROVED.value},
        {"trigger": "reject", "source": _open, "dest": BidStatus.REJECTED.value},
    ]
    status_triggers = {
        BidStatus.PUBLISHED.value: "publish",
        BidStatus.CANCELED.value: "cancel",
        BidStatus.APPROVED.value: "approve",
        BidStatus.REJECTED.value: "reject",
    }

    def __init__(self, bid: Bid, log: Logger = logger):
        super().__init__(bid, log)
