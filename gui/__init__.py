from gui.visualizer import Visualizer, belief_image, maze_image

__all__ = ["Visualizer", "belief_image", "maze_image"]
