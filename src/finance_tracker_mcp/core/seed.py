"""
Default categories created when a store starts empty.
"""

from typing import List

from finance_tracker_mcp.models.category import NewCategory

DEFAULT_CATEGORIES: List[NewCategory] = [
    # Expense categories
    NewCategory(name="Food & Dining", color="#f97316", icon="fas fa-utensils", type="expense"),
    NewCategory(name="Transportation", color="#eab308", icon="fas fa-car", type="expense"),
    NewCategory(name="Housing", color="#8b5cf6", icon="fas fa-home", type="expense"),
    NewCategory(name="Entertainment", color="#3b82f6", icon="fas fa-gamepad", type="expense"),
    NewCategory(name="Shopping", color="#ef4444", icon="fas fa-shopping-bag", type="expense"),
    NewCategory(name="Healthcare", color="#06b6d4", icon="fas fa-heartbeat", type="expense"),
    NewCategory(name="Other Expense", color="#64748b", icon="fas fa-ellipsis-h", type="expense"),
    # Income categories
    NewCategory(name="Salary", color="#059669", icon="fas fa-money-bill", type="income"),
    NewCategory(name="Business", color="#10b981", icon="fas fa-briefcase", type="income"),
    NewCategory(name="Investment", color="#34d399", icon="fas fa-chart-line", type="income"),
    NewCategory(name="Gift", color="#6ee7b7", icon="fas fa-gift", type="income"),
    NewCategory(name="Other Income", color="#a7f3d0", icon="fas fa-plus-circle", type="income"),
]
