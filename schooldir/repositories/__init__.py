from schooldir.repositories.school import NearbySchool, SchoolRepository

__all__ = ["NearbySchool", "SchoolRepository"]
