"""
Categories module exceptions.
"""

from shared.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError


class CategoryNotFoundError(NotFoundError):
    """Raised when a category is not found."""

    def __init__(self, category_id: str):
        super().__init__(
            "Category not found",
            code="CATEGORY_NOT_FOUND",
            details={"category_id": category_id},
        )


class CategoryAccessDeniedError(AuthorizationError):
    """Raised when a user touches another user's category."""

    def __init__(self, category_id: str, user_id: str, action: str = "access"):
        super().__init__(
            f"Not authorized to {action} this category",
            code="CATEGORY_ACCESS_DENIED",
            details={"category_id": category_id, "user_id": user_id},
        )


class DefaultCategoryError(AuthorizationError):
    """Raised when trying to modify a built-in category."""

    def __init__(self, category_id: str, action: str):
        super().__init__(
            f"Cannot {action} default categories",
            code="DEFAULT_CATEGORY_READ_ONLY",
            details={"category_id": category_id},
        )


class DuplicateCategoryError(ConflictError):
    """Raised when a visible category already has the name."""

    def __init__(self, name: str, entry_type: str | None = None):
        if entry_type:
            message = f'A {entry_type} category with the name "{name}" already exists'
        else:
            message = f'A category with the name "{name}" already exists'
        super().__init__(message, code="DUPLICATE_CATEGORY", details={"name": name})


class CategoryInUseError(ValidationError):
    """Raised when deleting a category that transactions still reference."""

    def __init__(self, category_id: str, transaction_count: int):
        super().__init__(
            f"Cannot delete category. {transaction_count} transaction(s) are using it. "
            "Please reassign or delete those transactions first.",
            code="CATEGORY_IN_USE",
            details={"category_id": category_id, "transaction_count": transaction_count},
        )
