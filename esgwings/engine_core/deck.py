"""
Deck Manager - Draw piles, discard piles and reshuffling.

Draw piles are tuples popped from the end. An empty pile is refilled by
shuffling its discard pile; when both are empty a draw yields nothing.

Shuffles never touch the global random module. Each shuffle builds its own
random.Random from (demo_seed, shuffle_count) via a SHA-256 derived seed, so
the same seed replays the same game on any platform.
"""

from __future__ import annotations
from collections import Counter
import hashlib
import json
import logging
import random
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .state import GameState

logger = logging.getLogger(__name__)


def stable_int_seed(*parts: Any, salt: str = "esgwings") -> int:
    """Return a stable 32-bit seed from arbitrary JSON-able parts.

    Avoids Python's randomized hash(), so seeds agree across processes.
    """
    payload = json.dumps(parts, sort_keys=True, separators=(",", ":"), default=str)
    digest = hashlib.sha256((salt + "|" + payload).encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big", signed=False)


def rng_for_shuffle(demo_seed: int, shuffle_count: int) -> random.Random:
    """Create the Random used for the Nth shuffle of a game."""
    return random.Random(stable_int_seed(demo_seed, shuffle_count))


def new_seed() -> int:
    """Pick a fresh game seed from the OS entropy source."""
    return random.SystemRandom().randrange(2**32)


def shuffle(cards: tuple[str, ...], rng: random.Random) -> tuple[str, ...]:
    """Return a uniformly shuffled copy (Fisher-Yates)."""
    new_cards = list(cards)
    rng.shuffle(new_cards)
    return tuple(new_cards)


def draw(
    pile: tuple[str, ...],
    discard: tuple[str, ...],
    rng: random.Random,
) -> tuple[str | None, tuple[str, ...], tuple[str, ...], bool]:
    """
    Draw one card from the end of a pile.

    Returns (card_id or None, new pile, new discard, reshuffled).
    """
    reshuffled = False
    if not pile:
        if not discard:
            return None, (), (), False
        pile = shuffle(discard, rng)
        discard = ()
        reshuffled = True
        logger.debug("Reshuffled %d discarded cards into the draw pile", len(pile))

    return pile[-1], pile[:-1], discard, reshuffled


def draw_main(state: GameState) -> tuple[str | None, GameState]:
    """Draw from the main deck, reshuffling the main discard if needed."""
    decks = state.decks
    rng = rng_for_shuffle(state.demo_seed, state.shuffle_count)
    card_id, pile, discard, reshuffled = draw(decks.main_deck, decks.main_discard, rng)
    new_state = state._copy_with(
        decks=decks._copy_with(main_deck=pile, main_discard=discard),
        shuffle_count=state.shuffle_count + (1 if reshuffled else 0),
    )
    return card_id, new_state


def draw_event(state: GameState) -> tuple[str | None, GameState]:
    """Draw from the event deck, reshuffling the event discard if needed."""
    decks = state.decks
    rng = rng_for_shuffle(state.demo_seed, state.shuffle_count)
    card_id, pile, discard, reshuffled = draw(decks.event_deck, decks.event_discard, rng)
    new_state = state._copy_with(
        decks=decks._copy_with(event_deck=pile, event_discard=discard),
        shuffle_count=state.shuffle_count + (1 if reshuffled else 0),
    )
    return card_id, new_state


def draw_card_for_player(state: GameState, player_idx: int) -> GameState:
    """Move one main-deck card into a player's hand. A dry deck is a no-op."""
    card_id, new_state = draw_main(state)
    if card_id is None:
        logger.debug("Main deck exhausted; %s draws nothing",
                     state.players[player_idx].player_id)
        return new_state

    player = new_state.players[player_idx]
    return new_state.with_player_at(player_idx, player.with_hand(player.hand + (card_id,)))


def card_counts(state: GameState) -> Counter[str]:
    """Count every card id across decks, discards and hands."""
    counts: Counter[str] = Counter()
    decks = state.decks
    for zone in (decks.event_deck, decks.event_discard, decks.main_deck, decks.main_discard):
        counts.update(zone)
    for player in state.players:
        counts.update(player.hand)
        counts.update(player.discard)
    return counts
