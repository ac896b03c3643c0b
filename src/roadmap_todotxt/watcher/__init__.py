from .roadmap_watcher import RoadmapWatcher

__all__ = ["RoadmapWatcher"]
