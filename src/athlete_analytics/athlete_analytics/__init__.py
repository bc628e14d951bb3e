"""Athlete Analytics package.

Season attendance analytics organized by feature modules (seasons, membership,
events, attendance, rankings, payroll, ...). The engine modules are pure
functions over already-fetched records; a thin Flask controller layer and the
service layer sit on top.
"""
