"""Tests for player bookkeeping and first-contact diplomacy."""

from hexwizards.domain.enums import ControllerKind, InteractionMode, PieceKind
from hexwizards.domain.grid import HexGrid
from hexwizards.domain.models import Coordinate, Player, PlayerID
from hexwizards.domain.pieces import PieceFactory


def _player(player_id: int, controller: ControllerKind = ControllerKind.AI) -> Player:
    return Player(
        id=PlayerID(player_id),
        name=f"Player {player_id}",
        color="#123456",
        controller=controller,
    )


class TestMeet:
    def test_players_have_always_met_themselves(self):
        player = _player(1)

        assert player.met == {PlayerID(1): True}
        assert player.has_met(player)

    def test_meet_is_symmetric(self):
        first, second = _player(1), _player(2)

        assert first.meet(second) is True

        assert first.has_met(second)
        assert second.has_met(first)

    def test_meet_is_idempotent(self):
        first, second = _player(1), _player(2)
        first.meet(second)

        assert first.meet(second) is False
        assert second.meet(first) is False
        assert first.met == {PlayerID(1): True, PlayerID(2): True}

    def test_meeting_does_not_spread_to_third_parties(self):
        first, second, third = _player(1), _player(2), _player(3)
        first.meet(second)

        assert not third.has_met(first)
        assert not second.has_met(third)


class TestPieces:
    def test_set_main_piece_claims_ownership(self):
        player = _player(4)
        unit = PieceFactory().make(PieceKind.UNIT)

        player.set_main_piece(unit)

        assert unit.owner_id == player.id
        assert player.token_ids == [unit.id]
        assert player.main_token_id == unit.id

    def test_add_token_is_not_duplicated(self):
        player = _player(1)
        tower = PieceFactory().make(PieceKind.STRUCTURE)

        player.add_token(tower)
        player.add_token(tower)

        assert player.token_ids == [tower.id]

    def test_remove_main_piece(self):
        player = _player(1)
        unit = PieceFactory().make(PieceKind.UNIT)
        player.set_main_piece(unit)

        player.remove_token(unit)

        assert player.token_ids == []
        assert player.main_token_id is None

    def test_has_discovered_uses_discovered_set(self):
        player = _player(1)
        grid = HexGrid(3, 1)
        player.discovered.add(Coordinate(0, 1))

        assert player.has_discovered(grid.get(Coordinate(0, 1)))
        assert not player.has_discovered(grid.get(Coordinate(0, 2)))


def test_switch_interaction_mode_toggles():
    player = _player(1, ControllerKind.HUMAN)

    assert player.interaction_mode == InteractionMode.MOVE
    assert player.switch_interaction_mode() == InteractionMode.PLACE
    assert player.switch_interaction_mode() == InteractionMode.MOVE
    assert player.is_human
