from .patient import Patient, GENDERS

__all__ = ["Patient", "GENDERS"]
