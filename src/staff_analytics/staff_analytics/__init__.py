"""Staff Analytics package.

Time & attendance analytics for multi-branch clinics, organized by feature
modules (attendance, staff, analytics) with a thin Flask controller layer on
top of service/repository layers.
"""
