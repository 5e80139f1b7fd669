from planning.path_finder import find_path, breadth_first_search, path_turns

__all__ = ["find_path", "breadth_first_search", "path_turns"]
