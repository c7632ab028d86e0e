"""
Engine - Applies player commands to the game state.

The engine is the single point of state mutation.
All state changes go through its command methods or apply().

Design principles:
- Validates before applying
- Works on a copy and commits only on success (no partial mutation)
- Returns ActionResult with an Outcome or a typed failure
- One centralized end-of-game check after every command
"""

from __future__ import annotations
import logging
import random

from ..config import EngineConfig
from .action import Action, ActionType, ActionResult, ErrorCode, Outcome, SkipReason
from .combat import can_attack, resolve_combat
from .deck import Card, Suit, RandomSource, create_play_deck, deal, shuffle
from .rules import PLAYS_PER_ROOM, ROOM_SIZE, check_game_end, cards_needed_for_next_room
from .state import GameState, GameResult, Zone

logger = logging.getLogger(__name__)


class Engine:
    """
    Rules engine for one game of Scoundrel.

    Usage:
        engine = Engine()
        engine.start_game(random.Random(42))

        result = engine.play_card(0)
        if not result.success:
            show(result.error)

    Commands must be issued one at a time; see session.SessionManager
    for a serialized front door.
    """

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()
        self._rng: RandomSource | None = None
        self.state = self._inert_state()
        # Successful actions, oldest first; not part of state snapshots
        self.action_history: list[Action] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_game(self, rng: RandomSource | None = None) -> GameState:
        """Trim and shuffle a fresh deck, deal the first room."""
        self._rng = rng if rng is not None else random.Random()
        state = self._inert_state()
        self.action_history = []
        state.deck = create_play_deck(self._rng)
        state.game_active = True

        self._deal_room_cards(state, Outcome())
        self.state = state
        logger.info(
            "Game started: health %d, deck %d, room %s",
            state.player_health, len(state.deck), [c.id for c in state.room_cards],
        )
        return self.snapshot()

    @classmethod
    def from_state(
        cls,
        state: GameState,
        rng: RandomSource | None = None,
        config: EngineConfig | None = None,
    ) -> Engine:
        """
        An engine resuming from a copy of ``state``.

        Used for lookahead and for setting up specific positions.
        """
        engine = cls(config or EngineConfig(max_health=state.max_health))
        engine.state = state.clone()
        engine._rng = rng if rng is not None else random.Random()
        return engine

    def reset_game(self) -> GameState:
        """Tear down to an inert, empty state. Always succeeds."""
        self._rng = None
        self.state = self._inert_state()
        self.action_history = []
        return self.snapshot()

    def snapshot(self) -> GameState:
        """A copy of the current state. Changing it has no effect on the game."""
        return self.state.clone()

    @property
    def cards_played_this_room(self) -> int:
        return self.state.cards_played_this_room

    def can_attack_with_weapon(self, slot_index: int) -> bool:
        """Whether the monster in ``slot_index`` may be fought with the weapon."""
        state = self.state
        if not 0 <= slot_index < len(state.room_cards):
            return False
        card = state.room_cards[slot_index]
        return card.is_monster and can_attack(card, state.current_weapon, state.weapon_stack)

    def skip_blocker(self) -> SkipReason | None:
        """Why the room cannot be skipped right now, or None if it can."""
        return self._skip_blocker(self.state)

    @staticmethod
    def _skip_blocker(state: GameState) -> SkipReason | None:
        if not state.game_active:
            return SkipReason.GAME_NOT_ACTIVE
        if state.last_action_was_skip:
            return SkipReason.ALREADY_SKIPPED
        if state.cards_played_this_room != 0:
            return SkipReason.CARDS_ALREADY_PLAYED
        if len(state.room_cards) != ROOM_SIZE:
            return SkipReason.WRONG_CARD_COUNT
        return None

    def update_health(self, delta: int) -> int:
        """
        Change health, clamped to [0, max_health].

        Returns the delta actually applied. Reaching 0 ends the game.
        Has no effect once the game is over.
        """
        if not self.state.game_active:
            return 0
        applied = self._update_health(self.state, delta)
        if check_game_end(self.state) is not None:
            logger.info("Game over (%s), score %d", self.state.result.value, self.state.score)
        return applied

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def play_card(self, slot_index: int) -> ActionResult:
        return self.apply(Action.play_card(slot_index))

    def equip_weapon(self, slot_index: int) -> ActionResult:
        return self.apply(Action.equip_weapon(slot_index))

    def fight_bare_handed(self, slot_index: int) -> ActionResult:
        return self.apply(Action.fight_bare_handed(slot_index))

    def skip_room(self) -> ActionResult:
        return self.apply(Action.skip_room())

    def advance_room(self) -> ActionResult:
        return self.apply(Action.advance_room())

    def apply(self, action: Action) -> ActionResult:
        """
        Apply a command.

        Returns ActionResult with the outcome and a state snapshot, or a
        failure with the state untouched.
        """
        handler = self._get_handler(action.action_type)
        working = self.state.clone()
        outcome = Outcome()

        result = handler(working, action, outcome)
        if not result.success:
            logger.debug("Rejected %s: %s", action.describe(), result.error)
            return result

        # Centralized end-of-game check
        ended = check_game_end(working)
        if ended is not None:
            self._record_game_end(working, outcome)

        self.state = working
        self.action_history.append(action)
        logger.debug("Applied %s: %s", action.describe(), "; ".join(outcome.events))

        outcome.room_cards = list(working.room_cards)
        result.new_state = self.snapshot()
        return result

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PLAY_CARD: self._handle_play_card,
            ActionType.EQUIP_WEAPON: self._handle_equip_weapon,
            ActionType.FIGHT_BARE_HANDED: self._handle_fight_bare_handed,
            ActionType.SKIP_ROOM: self._handle_skip_room,
            ActionType.ADVANCE_ROOM: self._handle_advance_room,
        }
        return handlers[action_type]

    # ------------------------------------------------------------------
    # Handlers (operate on a working copy)
    # ------------------------------------------------------------------

    def _handle_play_card(self, state: GameState, action: Action, outcome: Outcome) -> ActionResult:
        """Dispatch by suit: potion, weapon, or monster."""
        failure = self._check_playable(state, action.slot_index)
        if failure:
            return failure

        card = state.room_cards[action.slot_index]
        suit_handlers = {
            Suit.HEARTS: self._drink_potion,
            Suit.DIAMONDS: self._equip,
            Suit.CLUBS: self._fight,
            Suit.SPADES: self._fight,
        }
        return suit_handlers[card.suit](state, action.slot_index, outcome)

    def _handle_equip_weapon(self, state: GameState, action: Action, outcome: Outcome) -> ActionResult:
        failure = self._check_playable(state, action.slot_index)
        if failure:
            return failure

        card = state.room_cards[action.slot_index]
        if not card.is_weapon:
            return ActionResult.failure(
                f"Only diamonds can be equipped, not the {card}",
                ErrorCode.INVALID_EQUIP,
            )
        return self._equip(state, action.slot_index, outcome)

    def _handle_fight_bare_handed(self, state: GameState, action: Action, outcome: Outcome) -> ActionResult:
        failure = self._check_playable(state, action.slot_index)
        if failure:
            return failure

        card = state.room_cards[action.slot_index]
        if not card.is_monster:
            return ActionResult.failure(
                f"The {card} is not a monster",
                ErrorCode.NOT_A_MONSTER,
            )
        return self._fight(state, action.slot_index, outcome, use_bare_hands=True)

    def _handle_skip_room(self, state: GameState, action: Action, outcome: Outcome) -> ActionResult:
        """Send the whole room to the bottom of the deck and deal a new one."""
        reason = self._skip_blocker(state)
        if reason:
            return ActionResult.failure(
                f"Cannot skip this room ({reason.value.replace('_', ' ')})",
                ErrorCode.CANNOT_SKIP,
                reason=reason,
            )

        for card in state.room_cards:
            outcome.move(card, Zone.ROOM, Zone.DECK)
        state.deck.extend(state.room_cards)
        state.room_cards = []
        outcome.event("Ran from the room; its cards go to the bottom of the deck")

        self._deal_room_cards(state, outcome)
        state.last_action_was_skip = True
        return ActionResult.success_with_outcome(outcome)

    def _handle_advance_room(self, state: GameState, action: Action, outcome: Outcome) -> ActionResult:
        """Carry the leftover card over and deal the next room."""
        if not state.game_active:
            return ActionResult.failure("Game is not active", ErrorCode.GAME_NOT_ACTIVE)
        if state.cards_played_this_room != PLAYS_PER_ROOM:
            return ActionResult.failure(
                f"Play {PLAYS_PER_ROOM} cards before moving on "
                f"({state.cards_played_this_room} played)",
                ErrorCode.ROOM_NOT_COMPLETE,
            )

        leftovers, state.room_cards = state.room_cards, []
        if len(leftovers) == 1:
            state.carry_over_card = leftovers[0]
            outcome.move(leftovers[0], Zone.ROOM, Zone.CARRY_OVER)
            outcome.event(f"The {leftovers[0]} stays for the next room")
        else:
            logger.warning(
                "Completed room has %d leftover cards (expected 1); discarding them",
                len(leftovers),
            )
            for card in leftovers:
                outcome.move(card, Zone.ROOM, Zone.DISCARD)
            state.discard_pile.extend(leftovers)

        state.current_round += 1
        state.last_action_was_skip = False
        outcome.room_complete = True

        if check_game_end(state, room_transition=True) is None:
            self._deal_room_cards(state, outcome)
            outcome.event(f"Entered room {state.current_round + 1}")
        return ActionResult.success_with_outcome(outcome)

    # ------------------------------------------------------------------
    # Card effects
    # ------------------------------------------------------------------

    def _drink_potion(self, state: GameState, slot_index: int, outcome: Outcome) -> ActionResult:
        """Only the first potion in a room heals."""
        card = self._take_from_room(state, slot_index)
        if state.potion_used_this_room:
            outcome.event(f"Drank the {card}, but only one potion works per room")
        else:
            healed = self._update_health(state, card.value, outcome)
            state.potion_used_this_room = True
            outcome.event(f"Drank the {card} and healed {healed}")

        state.discard_pile.append(card)
        outcome.move(card, Zone.ROOM, Zone.DISCARD)
        self._finish_play(state, outcome)
        return ActionResult.success_with_outcome(outcome)

    def _equip(self, state: GameState, slot_index: int, outcome: Outcome) -> ActionResult:
        """Equip a weapon, discarding the old one with its defeated monsters."""
        if state.current_weapon:
            old = state.current_weapon
            state.discard_pile.append(old)
            outcome.move(old, Zone.WEAPON, Zone.DISCARD)
            for monster in state.weapon_stack:
                outcome.move(monster, Zone.WEAPON_STACK, Zone.DISCARD)
            state.discard_pile.extend(state.weapon_stack)
            state.weapon_stack = []
            outcome.event(f"Discarded the {old}")

        card = self._take_from_room(state, slot_index)
        state.current_weapon = card
        outcome.move(card, Zone.ROOM, Zone.WEAPON)
        outcome.event(f"Equipped the {card}")
        self._finish_play(state, outcome)
        return ActionResult.success_with_outcome(outcome)

    def _fight(
        self,
        state: GameState,
        slot_index: int,
        outcome: Outcome,
        use_bare_hands: bool = False,
    ) -> ActionResult:
        monster = state.room_cards[slot_index]
        resolution = resolve_combat(
            monster, state.current_weapon, state.weapon_stack, use_bare_hands
        )
        if resolution is None:
            last = state.last_defeated_monster
            return ActionResult.failure(
                f"The {state.current_weapon} can only fight monsters weaker than "
                f"the {last} ({last.value})",
                ErrorCode.WEAPON_TOO_WEAK,
            )

        self._take_from_room(state, slot_index)
        if resolution.weapon_used:
            state.weapon_stack.append(monster)
            outcome.move(monster, Zone.ROOM, Zone.WEAPON_STACK)
            how = f"with the {state.current_weapon}"
        else:
            state.discard_pile.append(monster)
            outcome.move(monster, Zone.ROOM, Zone.DISCARD)
            how = "bare-handed"

        taken = self._update_health(state, -resolution.damage, outcome)
        outcome.event(f"Fought the {monster} {how} and took {-taken} damage")
        self._finish_play(state, outcome)
        return ActionResult.success_with_outcome(outcome)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _inert_state(self) -> GameState:
        return GameState(
            player_health=self.config.max_health,
            max_health=self.config.max_health,
        )

    def _check_playable(self, state: GameState, slot_index: int | None) -> ActionResult | None:
        """Gates shared by every card-consuming command."""
        if not state.game_active:
            return ActionResult.failure("Game is not active", ErrorCode.GAME_NOT_ACTIVE)
        if state.cards_played_this_room >= PLAYS_PER_ROOM:
            return ActionResult.failure(
                f"Already played {PLAYS_PER_ROOM} cards this room",
                ErrorCode.ROOM_ALREADY_FULL,
            )
        if slot_index is None or not 0 <= slot_index < len(state.room_cards):
            return ActionResult.failure(
                f"No card in slot {slot_index}",
                ErrorCode.INVALID_SLOT,
            )
        return None

    def _take_from_room(self, state: GameState, slot_index: int) -> Card:
        return state.room_cards.pop(slot_index)

    def _finish_play(self, state: GameState, outcome: Outcome):
        state.cards_played_this_room += 1
        state.last_action_was_skip = False
        if state.cards_played_this_room == PLAYS_PER_ROOM:
            outcome.room_complete = True
            outcome.event("Room cleared")

    def _update_health(self, state: GameState, delta: int, outcome: Outcome | None = None) -> int:
        before = state.player_health
        state.player_health = max(0, min(state.max_health, before + delta))
        applied = state.player_health - before
        if outcome is not None:
            outcome.health_delta += applied
        check_game_end(state)
        return applied

    def _deal_room_cards(self, state: GameState, outcome: Outcome) -> bool:
        """
        Fill the room. Returns False if there were not enough cards.

        Reshuffles the discard pile into the deck when the deck alone is
        short. Running out of cards right after a completed room is a
        victory.
        """
        needed = cards_needed_for_next_room(state)

        if len(state.deck) < needed:
            if len(state.deck) + len(state.discard_pile) < needed:
                if state.cards_played_this_room == PLAYS_PER_ROOM:
                    check_game_end(state, room_transition=True)
                else:
                    logger.warning(
                        "Cannot deal %d cards (deck %d, discard %d); room left unchanged",
                        needed, len(state.deck), len(state.discard_pile),
                    )
                return False

            reshuffled = shuffle(state.discard_pile, self._rng)
            for card in reshuffled:
                outcome.move(card, Zone.DISCARD, Zone.DECK)
            state.deck.extend(reshuffled)
            state.discard_pile = []
            outcome.event("Shuffled the discard pile back into the deck")

        dealt, state.deck = deal(state.deck, needed)
        room = []
        if state.carry_over_card:
            room.append(state.carry_over_card)
            outcome.move(state.carry_over_card, Zone.CARRY_OVER, Zone.ROOM)
            state.carry_over_card = None
        for card in dealt:
            outcome.move(card, Zone.DECK, Zone.ROOM)
        room.extend(dealt)

        state.room_cards = room
        state.cards_played_this_room = 0
        state.potion_used_this_room = False
        return True

    def _record_game_end(self, state: GameState, outcome: Outcome):
        outcome.game_ended = True
        outcome.result = state.result
        if state.result == GameResult.VICTORY:
            outcome.event(f"Escaped the dungeon with {state.player_health} health. Score {state.score}")
        else:
            outcome.event(f"Slain in room {state.current_round + 1}. Score {state.score}")
        logger.info("Game over (%s), score %d", state.result.value, state.score)
