from datetime import datetime
from typing import List

from sqlalchemy.orm import Session

from ..exceptions import NotFoundError
from ..models import Action, User
from ..schemas import ActionRecord, ActionsFilter
from ..utils.instance_logger import InstanceLogger
from .store import LIKE_ESCAPE, escape_like, store_operation


class ActionsService:
    def __init__(self, db: Session):
        self.db = db
        self.log = InstanceLogger("ActionsService")

    def record_action(self, user: User, record: ActionRecord) -> Action:
        action = Action(
            type=record.type,
            component=record.component,
            value=record.value if record.value else None,
            url=record.url,
            performed_at=datetime.utcnow(),
            user_id=user.id,
        )

        with store_operation(self.db):
            self.db.add(action)
            self.db.commit()

        self.log.created(action)
        return action

    def select_actions(self, actions_filter: ActionsFilter) -> List[Action]:
        """Newest first, at most ``limit`` rows, optionally narrowed by owner username."""
        query = self.db.query(Action)

        if actions_filter.search:
            pattern = f"%{escape_like(actions_filter.search)}%"
            query = query.join(Action.user).filter(User.username.ilike(pattern, escape=LIKE_ESCAPE))

        with store_operation(self.db):
            actions = (
                query.order_by(Action.performed_at.desc())
                .limit(actions_filter.limit)
                .all()
            )

        self.log.selected("Action", len(actions))
        return actions

    def remove_action(self, action_id: str) -> bool:
        with store_operation(self.db):
            affected = self.db.query(Action).filter(Action.id == action_id).delete(synchronize_session=False)
            self.db.commit()

        self.log.deleted("Action", affected)

        if not affected:
            raise NotFoundError(f"Action {action_id} was not found.")
        return True
