from .dto import PatientRegistrationIn, RegistrationOut
from .service import RegistrationService

__all__ = ["RegistrationService", "PatientRegistrationIn", "RegistrationOut"]
