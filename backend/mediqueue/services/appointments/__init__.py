from .dto import AppointmentOut, BookAppointmentIn, CancelAppointmentIn
from .service import AppointmentService

__all__ = ["AppointmentService", "AppointmentOut", "BookAppointmentIn", "CancelAppointmentIn"]
