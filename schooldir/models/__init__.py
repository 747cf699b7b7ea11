from schooldir.models.school import School

__all__ = ["School"]
