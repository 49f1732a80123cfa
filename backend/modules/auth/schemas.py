"""
Request schemas for auth endpoints.
"""

from modules.validation import RequestSchema
from modules.validation.fields import choice, email, obj, string

register_schema = RequestSchema(
    body=obj(
        email(),
        string("password", min_length=6, max_length=100, trim=False),
        string("name", max_length=100),
    )
)

login_schema = RequestSchema(
    body=obj(
        email(),
        string("password", trim=False),
    )
)

forgot_password_schema = RequestSchema(body=obj(email()))

reset_password_schema = RequestSchema(
    body=obj(
        string("token"),
        string("newPassword", label="New password", min_length=6, max_length=100, trim=False),
    )
)

update_profile_schema = RequestSchema(
    body=obj(
        string("name", required=False, min_length=2, max_length=100),
        email(required=False),
        choice("language", ("es", "en"), required=False),
        choice("currency", ("EUR", "USD"), required=False),
    )
)

change_password_schema = RequestSchema(
    body=obj(
        string("currentPassword", label="Current password", trim=False),
        string("newPassword", label="New password", min_length=6, max_length=100, trim=False),
    )
)
