from .dto import DoctorCreateIn, DoctorOut
from .service import DoctorService, create_doctor

__all__ = ["DoctorService", "DoctorCreateIn", "DoctorOut", "create_doctor"]
