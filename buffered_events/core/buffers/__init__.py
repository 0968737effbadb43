from .maintenance import MaintenancePolicy

__all__ = ["MaintenancePolicy"]
