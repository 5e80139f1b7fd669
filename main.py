# ================================
# file: main.py
# ================================
from __future__ import annotations
"""Project entrypoint: drives the simulated car through a maze file.
- The controller only sees the bounded view around the car.
- With --gui a matplotlib window shows ground truth and the belief map.

Usage:
    python main.py --map ./data/demo_maze.json
    python main.py --map ./data/demo_maze.json --gui --steps 8000
"""
import argparse
import os
import time
from typing import Optional
from datetime import datetime

from core.config import CONTROL_HZ, DEFAULT_MAX_STEPS, LOG_DIR, LOG_LEVEL, GUI_UPDATE_EVERY
from core.system_initializer import SystemInitializer
from appio.logger import log_to_file

DEFAULT_MAP = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "demo_maze.json")


def run(json_map_path: str, max_steps: int = DEFAULT_MAX_STEPS, use_gui: bool = False,
        log_dir: str = LOG_DIR, log_level: str = LOG_LEVEL) -> bool:
    """Wire modules and run the tick loop.

    Returns True when the car reached an exit tile within `max_steps`.
    """
    os.makedirs(log_dir, exist_ok=True)
    stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    log_filepath = os.path.join(log_dir, f"car_run_log_{stamp}.txt")
    npz_filepath = os.path.join(log_dir, f"car_run_{stamp}.npz")

    dt = 1.0 / CONTROL_HZ
    step_count = 0
    reached = False

    with open(log_filepath, 'w', encoding='utf-8') as log_file:
        log_to_file(log_file, "=" * 60)
        log_to_file(log_file, "Maze car run log")
        log_to_file(log_file, f"Start: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        log_to_file(log_file, f"Map file: {json_map_path}")
        log_to_file(log_file, f"Tick: {dt:.3f}s, step budget: {max_steps}")
        log_to_file(log_file, "=" * 60)

        initializer = SystemInitializer(logger_func=log_to_file)
        car, maze, controller, events, gui, logger = initializer.initialize(
            json_map_path=json_map_path,
            use_gui=use_gui,
            log_file=log_file,
            log_level=log_level,
        )

        last_action: Optional[str] = None
        try:
            while step_count < max_steps:
                tick_start = time.time()
                step_count += 1

                controller.update(dt)
                car.step(dt)

                x, y, angle = car.car_sim.pose()
                logger.log_pose(x, y, angle, car.car_sim.velocity)
                position = car.get_position()
                logger.log_tile(position.x, position.y)
                action = controller.motion.current_action.value
                if action != last_action:
                    logger.log_action(action, controller.motion.action_stage)
                    last_action = action

                if gui is not None and step_count % GUI_UPDATE_EVERY == 0:
                    gui.update(controller.belief_map, (x, y), controller.path, controller.mode.value)

                # --- Termination ---
                if maze.is_exit(position):
                    log_to_file(log_file, f"Exit reached at {position} after {step_count} steps")
                    reached = True
                    break

                if gui is not None:
                    spent = time.time() - tick_start
                    if spent < dt:
                        time.sleep(dt - spent)
            else:
                log_to_file(log_file, f"Step budget exhausted at {car.get_position()}")
        except KeyboardInterrupt:
            log_to_file(log_file, "Interrupted by user")
        finally:
            logger.save(npz_filepath)
            if gui is not None:
                gui.close()

            log_to_file(log_file, "=" * 60)
            log_to_file(log_file, f"Run finished - steps: {step_count}, mode: {controller.mode.value}")
            log_to_file(log_file, f"Known tiles: {len(controller.belief_map.known_coordinates())}, "
                                  f"collisions: {car.car_sim.collisions}, errors: {len(events.errors())}")
            log_to_file(log_file, f"Trajectory: {npz_filepath}")
            log_to_file(log_file, "=" * 60)

    return reached


def _parse_args():
    ap = argparse.ArgumentParser(description="Tile-maze autonomous car")
    ap.add_argument("--map", type=str, default=DEFAULT_MAP, help="maze JSON path")
    ap.add_argument("--steps", type=int, default=DEFAULT_MAX_STEPS, help="maximum number of ticks")
    ap.add_argument("--gui", action="store_true", help="show the matplotlib viewer")
    ap.add_argument("--log-dir", type=str, default=LOG_DIR, help="directory for run logs")
    ap.add_argument("--log-level", type=str, default=LOG_LEVEL,
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="console event level")
    return ap.parse_args()


def main():
    args = _parse_args()
    reached = run(json_map_path=args.map, max_steps=args.steps, use_gui=args.gui,
                  log_dir=args.log_dir, log_level=args.log_level)
    raise SystemExit(0 if reached else 1)


if __name__ == "__main__":
    main()
