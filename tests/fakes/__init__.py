from .fitbit import FitbitLogFake
from .stores import CredentialStoreFake

__all__ = ["CredentialStoreFake", "FitbitLogFake"]
