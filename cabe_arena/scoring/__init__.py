"""
scoring/ — Service Points Formula v5

Modules:
    utils.py               - Decimal utilities (rounding, clamp, weighted mean)
    scaling.py             - Exponential level scaling f(L) and user level
    skill_config.py        - Per-skill multipliers, caps and factor weights
    bonus_calculator.py    - Bonus with clamp-then-boost over-cap logic
    rank_calculator.py     - Bronze → Diamond rank tiers and progress
    points_calculator.py   - Submission points orchestrator
    task_points.py         - Task-factor points formula and fairness analysis
"""
