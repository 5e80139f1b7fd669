from appio.logger import EventKind, EventLog
from core.config import TRAP_SPEED
from core.types import Coordinate, Direction, ObservedTile, RelativeDirection
from explore import ExplorerState, ExplorerStrategy


def _explorer(belief, state=ExplorerState.NORMAL):
    explorer = ExplorerStrategy(belief, EventLog(echo=False))
    explorer.state = state
    return explorer


class TestNormalState:
    ROWS = [
        "#####",
        "#...#",
        "#.S.#",
    ]

    def test_wall_north_turns_right_until_east(self, belief_from_rows, make_controller) -> None:
        explorer = _explorer(belief_from_rows(self.ROWS))
        controller = make_controller(Coordinate(2, 0), Direction.NORTH)
        explorer.update(controller)
        assert controller.intents == [("TURN", RelativeDirection.RIGHT)]
        assert explorer.state == ExplorerState.NORMAL

    def test_facing_east_with_wall_north_starts_following(self, belief_from_rows, make_controller) -> None:
        explorer = _explorer(belief_from_rows(self.ROWS))
        controller = make_controller(Coordinate(2, 0), Direction.EAST)
        explorer.update(controller)
        assert controller.intents == []
        assert explorer.state == ExplorerState.WALL_FOLLOWING

    def test_open_north_turns_left_toward_north(self, belief_from_rows, make_controller) -> None:
        explorer = _explorer(belief_from_rows([
            ".....",
            ".....",
            "..S..",
        ]))
        controller = make_controller(Coordinate(2, 0), Direction.EAST)
        explorer.update(controller)
        assert controller.intents == [("TURN", RelativeDirection.LEFT)]

        controller = make_controller(Coordinate(2, 0), Direction.NORTH)
        explorer.update(controller)
        assert controller.intents == []
        assert explorer.state == ExplorerState.NORMAL


class TestWallFollowing:
    def test_lost_wall_turns_left(self, belief_from_rows, make_controller) -> None:
        explorer = _explorer(belief_from_rows([
            ".....",
            ".....",
            "..S..",
            "#####",
        ]), ExplorerState.WALL_FOLLOWING)
        controller = make_controller(Coordinate(2, 1), Direction.EAST)
        explorer.update(controller)
        assert controller.intents == [("TURN", RelativeDirection.LEFT)]
        assert explorer.state == ExplorerState.JUST_TURNED_LEFT
        assert explorer.previous_position == Coordinate(2, 1)

    def test_wall_ahead_turns_right(self, belief_from_rows, make_controller) -> None:
        explorer = _explorer(belief_from_rows([
            "######",
            "#.S.#.",
            "#.....",
            "#.....",
        ]), ExplorerState.WALL_FOLLOWING)
        controller = make_controller(Coordinate(2, 2), Direction.EAST)
        explorer.update(controller)
        assert controller.intents == [("TURN", RelativeDirection.RIGHT)]
        assert explorer.state == ExplorerState.WALL_FOLLOWING

    def test_open_road_keeps_going(self, belief_from_rows, make_controller) -> None:
        explorer = _explorer(belief_from_rows([
            "#######",
            "#.S....",
            ".......",
        ]), ExplorerState.WALL_FOLLOWING)
        controller = make_controller(Coordinate(2, 1), Direction.EAST)
        explorer.update(controller)
        assert controller.intents == []

    def test_after_reversal_spins_left(self, belief_from_rows, make_controller) -> None:
        explorer = _explorer(belief_from_rows([
            ".....",
            ".....",
            "..S..",
        ]), ExplorerState.WALL_FOLLOWING)
        explorer.just_reversed = True
        controller = make_controller(Coordinate(2, 0), Direction.EAST)
        # backing out of a dead end: body faces WEST, travel heading is EAST
        controller.reversing = True
        controller.body_orientation = Direction.WEST
        explorer.update(controller)
        assert controller.intents[0] == ("SPIN", RelativeDirection.LEFT)
        assert ("TOGGLE_REVERSE", False) in controller.intents
        assert explorer.just_reversed is False


class TestDeadEnds:
    def test_narrow_dead_end_reverses(self, belief_from_rows, make_controller) -> None:
        explorer = _explorer(belief_from_rows([
            "######",
            "#.S.##",
            "######",
        ]), ExplorerState.WALL_FOLLOWING)
        controller = make_controller(Coordinate(2, 1), Direction.EAST)
        explorer.update(controller)
        assert controller.intents == [("TOGGLE_REVERSE", True)]
        assert explorer.just_reversed is True
        assert explorer.state == ExplorerState.WALL_FOLLOWING
        assert explorer.events.events(EventKind.DEAD_END)

    def test_room_on_the_left_three_point_turn(self, belief_from_rows, make_controller) -> None:
        explorer = _explorer(belief_from_rows([
            "######",
            "###.##",
            "#.S.##",
            "######",
        ]), ExplorerState.WALL_FOLLOWING)
        controller = make_controller(Coordinate(2, 1), Direction.EAST)
        explorer.update(controller)
        assert controller.intents == [("THREE_POINT", RelativeDirection.RIGHT)]
        assert explorer.state == ExplorerState.JUST_TURNED_LEFT

    def test_room_on_the_right_uturn(self, belief_from_rows, make_controller) -> None:
        explorer = _explorer(belief_from_rows([
            "######",
            "#.S.##",
            "#...##",
            "#...##",
        ]), ExplorerState.WALL_FOLLOWING)
        controller = make_controller(Coordinate(2, 2), Direction.EAST)
        explorer.deal_with_dead_end(controller)
        assert controller.intents == [("UTURN", RelativeDirection.RIGHT)]
        assert explorer.state == ExplorerState.JUST_TURNED_LEFT


class TestJustTurnedLeft:
    ROWS = [
        "#####",
        "#....",
        "#....",
    ]

    def test_waits_for_new_tile(self, belief_from_rows, make_controller) -> None:
        explorer = _explorer(belief_from_rows(self.ROWS), ExplorerState.JUST_TURNED_LEFT)
        explorer.previous_position = Coordinate(2, 1)
        controller = make_controller(Coordinate(2, 1), Direction.EAST)
        explorer.update(controller)
        assert explorer.state == ExplorerState.JUST_TURNED_LEFT

    def test_back_to_wall_following_after_moving(self, belief_from_rows, make_controller) -> None:
        explorer = _explorer(belief_from_rows(self.ROWS), ExplorerState.JUST_TURNED_LEFT)
        explorer.previous_position = Coordinate(2, 1)
        controller = make_controller(Coordinate(3, 1), Direction.EAST)
        explorer.update(controller)
        assert explorer.state == ExplorerState.WALL_FOLLOWING
        assert controller.intents == []


class TestTraps:
    ROWS = [
        "#######",
        "#.ST...",
        "#######",
    ]

    def test_single_trap_is_passed_at_speed(self, belief_from_rows, make_controller) -> None:
        explorer = _explorer(belief_from_rows(self.ROWS), ExplorerState.WALL_FOLLOWING)
        controller = make_controller(Coordinate(2, 1), Direction.EAST)
        explorer.update(controller)
        assert explorer.state == ExplorerState.PASSING_TRAP
        assert controller.speed_target == TRAP_SPEED

        # on top of the trap the raised speed stays
        controller.position = Coordinate(3, 1)
        explorer.update(controller)
        assert explorer.state == ExplorerState.PASSING_TRAP
        assert controller.speed_target == TRAP_SPEED

        controller.position = Coordinate(4, 1)
        explorer.update(controller)
        assert explorer.state == ExplorerState.WALL_FOLLOWING
        assert controller.speed_target == 2.0

    def test_trap_on_the_left_is_not_a_wall(self, belief_from_rows) -> None:
        explorer = _explorer(belief_from_rows([
            ".....",
            "..T..",
            "..S..",
        ]))
        assert not explorer.check_following_wall(Coordinate(2, 0), Direction.EAST)


class TestStrategySwitch:
    def test_reports_exit(self, belief_from_rows) -> None:
        explorer = _explorer(belief_from_rows(["S.."]))
        assert not explorer.should_change_strategy()
        explorer.belief_map.update({Coordinate(5, 5): ObservedTile("Finish", exit=True)})
        assert explorer.should_change_strategy()

    def test_state_changes_are_logged(self, belief_from_rows, make_controller) -> None:
        explorer = _explorer(belief_from_rows(TestNormalState.ROWS))
        explorer.update(make_controller(Coordinate(2, 0), Direction.EAST))
        changes = explorer.events.events(EventKind.STATE_CHANGE)
        assert len(changes) == 1
        assert "NORMAL -> WALL_FOLLOWING" in changes[0].message
