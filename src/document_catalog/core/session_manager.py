"""Online presence tracking.

Sessions expire when their last activity is older than the timeout. Expired
rows are purged at the start of every session operation, by a periodic
background sweep, and filtered out of ``list_online`` in case neither has run
since they went stale.
"""

import asyncio
import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional

from ..infrastructure.database.store import TableStore
from ..models.session import Identity, OnlineUser
from .identifiers import SESSION, Clock, generate_id, utcnow
from .identity import require_identity

logger = logging.getLogger(__name__)

ONLINE = "Online"


class SessionManager:
    """Login / heartbeat / logout state machine over the online-users table."""

    TABLE = "online_users"

    def __init__(self, store: TableStore, timeout_minutes: int = 30, clock: Clock = utcnow):
        self.store = store
        self.timeout = timedelta(minutes=timeout_minutes)
        self.clock = clock
        self._sweep_task: Optional[asyncio.Task] = None

    def is_expired(self, row: Dict[str, Any]) -> bool:
        return self.clock() - row["last_activity"] > self.timeout

    async def _sweep(self) -> int:
        removed = await self.store.delete_matching(self.TABLE, self.is_expired)
        if removed:
            logger.info(f"Purged {removed} expired session(s)")
        return removed

    async def sweep(self) -> int:
        """Delete every expired session row; returns how many were purged."""
        async with self.store.locked(self.TABLE):
            return await self._sweep()

    async def login(self, user: Identity) -> OnlineUser:
        """Start (or restart) the user's session; both timestamps reset."""
        user = require_identity(user)
        async with self.store.locked(self.TABLE):
            await self._sweep()
            return await self._write_session(user, reset=True)

    async def heartbeat(self, user: Identity) -> OnlineUser:
        """Refresh the user's last activity, creating the session if needed."""
        user = require_identity(user)
        async with self.store.locked(self.TABLE):
            await self._sweep()
            return await self._write_session(user, reset=False)

    async def logout(self, user: Identity) -> bool:
        """End the user's session. Idempotent; returns whether a row was removed."""
        user = require_identity(user)
        async with self.store.locked(self.TABLE):
            await self._sweep()
            removed = await self.store.delete_row(self.TABLE, user.email)
        if removed:
            logger.info(f"User {user.email} logged out")
        return removed

    async def list_online(self) -> List[OnlineUser]:
        """Online users, most recently active first."""
        async with self.store.locked(self.TABLE):
            await self._sweep()
            rows = await self.store.read_all(self.TABLE)
        users = [
            OnlineUser.model_validate(row)
            for row in rows
            if row["status"] == ONLINE and not self.is_expired(row)
        ]
        users.sort(key=lambda u: u.last_activity, reverse=True)
        return users

    async def _write_session(self, user: Identity, reset: bool) -> OnlineUser:
        now = self.clock()
        existing = await self.store.get(self.TABLE, user.email)
        if existing is None:
            row = await self.store.append(self.TABLE, {
                "session_id": generate_id(SESSION),
                "user_email": user.email,
                "user_name": user.name or user.email,
                "login_time": now,
                "last_activity": now,
                "avatar": user.avatar or "",
                "status": ONLINE,
            })
            logger.info(f"Session started for {user.email}")
            return OnlineUser.model_validate(row)

        if reset:
            values = {
                "session_id": generate_id(SESSION),
                "user_name": user.name or user.email,
                "login_time": now,
                "last_activity": now,
                "avatar": user.avatar or existing["avatar"],
                "status": ONLINE,
            }
        else:
            values = {"last_activity": now, "status": ONLINE}
        await self.store.update_row(self.TABLE, user.email, values)
        return OnlineUser.model_validate({**existing, **values})

    async def start_sweep_task(self, interval_seconds: int = 60):
        """Start background task that purges expired sessions."""
        async def sweep_loop():
            while True:
                await asyncio.sleep(interval_seconds)
                try:
                    await self.sweep()
                except Exception as e:
                    logger.warning(f"Session sweep failed: {e}")

        self._sweep_task = asyncio.create_task(sweep_loop())
        logger.info("Started session sweep background task")

    async def stop_sweep_task(self):
        """Stop the sweep background task."""
        if self._sweep_task:
            self._sweep_task.cancel()
            try:
                await self._sweep_task
            except asyncio.CancelledError:
                pass
            self._sweep_task = None
            logger.info("Stopped session sweep background task")
