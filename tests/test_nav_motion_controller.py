import pytest

from appio.logger import EventLog
from core.config import (
    CAR_TURN_DEG_PER_S, MAX_SPEED, MISALIGNED_THRESHOLD, THREE_POINT_SPEED, UTURN_SPEED,
)
from core.types import Direction, RelativeDirection
from nav import ActionKind, MotionController, SuspendedAction
from sim import CarSim, MazeMap, SimCarAdapter

DT = 0.05


def _motion(car):
    return MotionController(car, EventLog(echo=False))


class TestIdleActions:
    def test_starts_in_go_at_full_speed(self, make_car) -> None:
        motion = _motion(make_car())
        assert motion.current_action == ActionKind.GO
        assert motion.is_idle()
        assert motion.speed_target == MAX_SPEED

    def test_go_accelerates_below_target(self, make_car) -> None:
        car = make_car(velocity=0.5)
        _motion(car).update(DT)
        assert car.names() == ["forward"]

    def test_go_brakes_at_target(self, make_car) -> None:
        car = make_car(velocity=MAX_SPEED)
        _motion(car).update(DT)
        assert car.names() == ["brake"]

    def test_go_in_reverse_uses_reverse_thrust(self, make_car) -> None:
        car = make_car()
        motion = _motion(car)
        motion.toggle_reverse_mode()
        motion.update(DT)
        assert car.names() == ["reverse"]

    def test_stop_brakes_while_moving(self, make_car) -> None:
        car = make_car(velocity=1.0)
        motion = _motion(car)
        motion.current_action = ActionKind.STOP
        motion.update(DT)
        assert car.names() == ["brake"]


class TestReadjust:
    def test_steers_back_toward_cardinal(self, make_car) -> None:
        car = make_car(angle=10.0, velocity=MAX_SPEED)
        _motion(car).update(DT)
        name, delta = car.calls[0]
        assert name == "right"
        assert delta == pytest.approx(DT)

    def test_never_overshoots(self, make_car) -> None:
        car = make_car(angle=87.0, velocity=MAX_SPEED)
        _motion(car).update(DT)
        name, delta = car.calls[0]
        assert name == "left"
        assert delta == pytest.approx(3.0 / CAR_TURN_DEG_PER_S)

    def test_ignores_small_misalignment(self, make_car) -> None:
        car = make_car(angle=0.5, velocity=MAX_SPEED)
        _motion(car).update(DT)
        assert "left" not in car.names()
        assert "right" not in car.names()


class TestSpeedTarget:
    def test_clamped_and_restored(self, make_car) -> None:
        motion = _motion(make_car())
        motion.set_speed_target(0.8)
        motion.set_speed_target(10.0)
        assert motion.speed_target == MAX_SPEED
        motion.reset_speed_target()
        assert motion.speed_target == 0.8


class TestTurn:
    def test_turn_runs_until_square_to_the_next_cardinal(self, make_car) -> None:
        car = make_car(angle=0.0)
        motion = _motion(car)
        motion.perform_turn(RelativeDirection.LEFT)
        assert motion.current_action == ActionKind.TURN
        assert not motion.is_idle()
        assert motion.action_stack[-1].action == ActionKind.GO

        motion.update(DT)
        assert ("left", DT) in car.calls
        assert motion.current_action == ActionKind.TURN

        # past the sector boundary, still well short of NORTH
        car.angle = 50.0
        motion.update(DT)
        assert motion.current_action == ActionKind.TURN

        car.angle = 89.5
        motion.update(DT)
        assert motion.current_action == ActionKind.GO
        assert motion.action_stack == []

    def test_last_step_lands_on_the_cardinal(self, make_car) -> None:
        car = make_car(angle=0.0, velocity=MAX_SPEED)
        motion = _motion(car)
        motion.perform_turn(RelativeDirection.RIGHT)
        car.angle = 273.0
        motion.update(DT)
        name, delta = car.calls[-1]
        assert name == "right"
        assert delta == pytest.approx(3.0 / CAR_TURN_DEG_PER_S)

    def test_turn_while_reversing_targets_the_body_heading(self, make_car) -> None:
        car = make_car(angle=90.0)
        motion = _motion(car)
        motion.toggle_reverse_mode()
        # travelling SOUTH, a right turn ends travelling WEST with the body facing EAST
        motion.perform_turn(RelativeDirection.RIGHT)
        car.angle = 10.0
        motion.update(DT)
        assert motion.current_action == ActionKind.TURN
        car.angle = 0.0
        motion.update(DT)
        assert motion.current_action == ActionKind.GO
        assert motion.get_orientation() == Direction.WEST

    def test_empty_stack_falls_back_to_stop(self, make_car) -> None:
        car = make_car(angle=0.0)
        motion = _motion(car)
        motion.perform_turn(RelativeDirection.RIGHT)
        motion.action_stack.clear()
        car.angle = 270.0
        motion.update(DT)
        assert motion.current_action == ActionKind.STOP


class TestTurnOnSimulatedCar:
    def test_quarter_turn_ends_square(self) -> None:
        adapter = SimCarAdapter(CarSim(MazeMap.from_rows([
            "#####",
            "#...#",
            "#.S.#",
            "#...#",
            "#####",
        ])))
        motion = _motion(adapter)
        motion.perform_turn(RelativeDirection.LEFT)
        for _ in range(100):
            motion.update(DT)
            if motion.is_idle():
                break
            adapter.step(DT)
        assert motion.is_idle()
        assert adapter.get_angle() == pytest.approx(90.0, abs=MISALIGNED_THRESHOLD)
        assert motion.get_orientation() == Direction.NORTH


class TestUTurn:
    def test_two_turns_then_speed_restored(self, make_car) -> None:
        car = make_car(angle=0.0, velocity=0.0)
        motion = _motion(car)
        motion.perform_uturn(RelativeDirection.RIGHT)
        assert motion.speed_target == UTURN_SPEED

        motion.update(DT)  # slow enough
        assert motion.action_stage == 1
        motion.update(DT)  # first turn
        assert motion.current_action == ActionKind.TURN
        assert motion.action_stack[-1].action == ActionKind.UTURN
        assert motion.action_stack[-1].stage == 2

        car.angle = 270.0
        motion.update(DT)
        assert motion.current_action == ActionKind.UTURN
        assert motion.action_stage == 2

        motion.update(DT)  # second turn
        assert motion.current_action == ActionKind.TURN
        car.angle = 180.0
        motion.update(DT)
        assert motion.current_action == ActionKind.UTURN
        assert motion.action_stage == 3

        motion.update(DT)
        assert motion.current_action == ActionKind.GO
        assert motion.speed_target == MAX_SPEED

    def test_spin_is_a_slow_uturn(self, make_car) -> None:
        motion = _motion(make_car())
        motion.perform_spin(RelativeDirection.LEFT)
        assert motion.current_action == ActionKind.UTURN
        assert motion.speed_target < UTURN_SPEED


class TestThreePointTurn:
    def test_starts_in_reverse(self, make_car) -> None:
        car = make_car(angle=90.0, velocity=0.0)
        motion = _motion(car)
        motion.perform_three_point_turn(RelativeDirection.RIGHT)
        assert motion.get_reverse_mode()
        assert motion.get_orientation() == Direction.SOUTH
        assert motion.speed_target == THREE_POINT_SPEED

        motion.update(DT)
        assert motion.action_stage == 1
        assert car.names() == ["reverse"]

    def test_turn_stage_does_not_fall_through(self, make_car) -> None:
        car = make_car(angle=90.0, velocity=0.0)
        motion = _motion(car)
        motion.perform_three_point_turn(RelativeDirection.RIGHT)
        motion.action_stage = 2
        car.velocity = THREE_POINT_SPEED * 0.9
        motion.update(DT)
        # the nested turn was started and nothing else happened this tick
        assert motion.current_action == ActionKind.TURN
        assert car.names() == []
        assert motion.action_stack[-1].action == ActionKind.THREE_POINT
        assert motion.action_stack[-1].stage == 3

    def test_back_to_forward_after_stopping(self, make_car) -> None:
        car = make_car(angle=0.0, velocity=0.0)
        motion = _motion(car)
        motion.perform_three_point_turn(RelativeDirection.RIGHT)
        motion.action_stage = 3
        motion.update(DT)
        assert motion.action_stage == 4
        assert not motion.get_reverse_mode()


class TestStackRecords:
    def test_suspended_action_repr(self) -> None:
        assert repr(SuspendedAction(ActionKind.UTURN, 2)) == "SuspendedAction(UTURN, 2)"
