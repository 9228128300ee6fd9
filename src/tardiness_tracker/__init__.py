"""Student tardiness tracker.

Feature modules (attendance, students, reports) each keep a pure domain
model, a repository interface, a MySQL implementation and a thin Flask
controller on top of the service layer.
"""
