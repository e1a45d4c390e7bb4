"""Settlement of player hands and insurance against the dealer."""

from decimal import Decimal
from typing import NamedTuple

from bjtrainer.config import GameSettings
from bjtrainer.hand import HandResult, HandState, get_hand_total, is_blackjack


class HandOutcome(NamedTuple):
    """Result of one hand and the signed bankroll change it causes."""

    result: HandResult
    payout: Decimal


def resolve_hand(
    hand: HandState,
    dealer_hand: HandState,
    settings: GameSettings,
) -> HandOutcome:
    """
    Settle one player hand against the dealer.

    Rules are checked in order: surrender, player bust, both naturals,
    player natural, dealer natural, dealer bust, then the higher total.
    Any two-card 21 is paid as a natural, split hands included.

    Returns:
        The hand result and the payout (negative when the bet is lost)
    """
    bet = Decimal(hand.bet)

    if hand.is_surrendered:
        return HandOutcome(HandResult.SURRENDER, -(bet / 2))

    player_total = get_hand_total(hand.cards).best
    dealer_total = get_hand_total(dealer_hand.cards).best
    player_bj = is_blackjack(hand.cards)
    dealer_bj = is_blackjack(dealer_hand.cards)

    # Player busts always loses
    if player_total > 21:
        return HandOutcome(HandResult.LOSS, -bet)

    if player_bj and dealer_bj:
        return HandOutcome(HandResult.PUSH, Decimal("0"))
    if player_bj:
        return HandOutcome(
            HandResult.BLACKJACK, bet * Decimal(str(settings.blackjack_payout))
        )
    if dealer_bj:
        return HandOutcome(HandResult.LOSS, -bet)

    if dealer_total > 21:
        return HandOutcome(HandResult.WIN, bet)

    if player_total > dealer_total:
        return HandOutcome(HandResult.WIN, bet)
    if player_total < dealer_total:
        return HandOutcome(HandResult.LOSS, -bet)
    return HandOutcome(HandResult.PUSH, Decimal("0"))


def resolve_insurance(dealer_hand: HandState, insurance_bet: Decimal) -> Decimal:
    """Insurance pays 2:1 against a dealer natural and is lost otherwise."""
    if is_blackjack(dealer_hand.cards):
        return insurance_bet * 2
    return -insurance_bet
