"""
Game Service - Framework-agnostic layer between front-ends and the engine.

The service:
1. Manages sessions
2. Translates front-end commands to engine actions
3. Formats engine results as pydantic responses

Front-ends (the terminal CLI, a web view, tests) call this; none of
them touch the engine state directly.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Union

from ..engine_core.action import Action
from ..session import SessionManager, Session
from .schemas import (
    ActionInfo,
    CommandResponse,
    ErrorCode,
    ErrorResponse,
    GameStateResponse,
    LegalActionsResponse,
    SessionListResponse,
    SessionResponse,
    SessionStatus,
)

CommandResult = Union[CommandResponse, ErrorResponse]


@dataclass
class GameService:
    """
    Main service for presentation layers.

    Usage:
        service = GameService()
        session = service.create_session(seed=7)

        response = service.play_card(session.session_id, 0)
        if not response.success:
            toast(response.error)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def create_session(self, seed: int | None = None) -> SessionResponse:
        session = self.session_manager.create_session(seed=seed)
        return self._session_response(session)

    def get_session(self, session_id: str) -> Union[SessionResponse, ErrorResponse]:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_response(session)

    def restart_session(self, session_id: str, seed: int | None = None) -> Union[SessionResponse, ErrorResponse]:
        """Reset the game and deal a new one in the same session."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        session.restart(seed)
        return self._session_response(session)

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> SessionListResponse:
        sessions = self.session_manager.list_active_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    def get_state(self, session_id: str) -> Union[GameStateResponse, ErrorResponse]:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return GameStateResponse.from_state(session.snapshot())

    def get_legal_actions(self, session_id: str) -> Union[LegalActionsResponse, ErrorResponse]:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return LegalActionsResponse(
            session_id=session_id,
            actions=[
                ActionInfo(action_type=a.action_type.value, slot_index=a.slot_index)
                for a in session.legal_actions()
            ],
        )

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def play_card(self, session_id: str, slot_index: int) -> CommandResult:
        return self._dispatch(session_id, Action.play_card(slot_index))

    def equip_weapon(self, session_id: str, slot_index: int) -> CommandResult:
        return self._dispatch(session_id, Action.equip_weapon(slot_index))

    def fight_bare_handed(self, session_id: str, slot_index: int) -> CommandResult:
        return self._dispatch(session_id, Action.fight_bare_handed(slot_index))

    def skip_room(self, session_id: str) -> CommandResult:
        return self._dispatch(session_id, Action.skip_room())

    def advance_room(self, session_id: str) -> CommandResult:
        return self._dispatch(session_id, Action.advance_room())

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _dispatch(self, session_id: str, action: Action) -> CommandResult:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        result = session.dispatch(action)
        if not result.success:
            return ErrorResponse.from_result(result)
        return CommandResponse.from_result(result)

    def _session_response(self, session: Session) -> SessionResponse:
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            seed=session.seed,
            commands_applied=session.commands_applied,
            state=GameStateResponse.from_state(session.snapshot()),
        )

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )
