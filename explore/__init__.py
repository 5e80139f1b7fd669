from explore.wall_follower import ExplorerStrategy, ExplorerState

__all__ = ["ExplorerStrategy", "ExplorerState"]
