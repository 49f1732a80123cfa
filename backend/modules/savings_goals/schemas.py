"""
Request schemas for savings goal endpoints.
"""

from modules.validation import RequestSchema
from modules.validation.fields import (
    MAX_AMOUNT,
    amount,
    choice,
    datetime_field,
    hex_color,
    number,
    obj,
    object_id,
    optional,
    string,
)

goal_id_params = obj(object_id("id", message="Invalid goal ID"))


def _current_amount():
    return number(
        "currentAmount", label="Current amount", minimum=0, maximum=MAX_AMOUNT, max_decimals=2
    )


create_goal_schema = RequestSchema(
    body=obj(
        string("name", max_length=100),
        amount("targetAmount", label="Target amount"),
        optional(_current_amount(), default=0),
        datetime_field("deadline"),
        string("category"),
        hex_color(),
        string("icon", required=False, max_length=50),
    )
)

update_goal_schema = RequestSchema(
    body=obj(
        string("name", required=False, max_length=100),
        optional(amount("targetAmount", label="Target amount")),
        optional(_current_amount()),
        datetime_field("deadline", required=False),
        string("category", required=False),
        hex_color(),
        string("icon", required=False, max_length=50),
    ),
    params=goal_id_params,
)

add_progress_schema = RequestSchema(body=obj(amount()), params=goal_id_params)

goal_id_schema = RequestSchema(params=goal_id_params)

goal_query_schema = RequestSchema(
    query=obj(
        choice(
            "status",
            ("active", "completed", "all"),
            required=False,
            message="Status must be one of: active, completed, all",
        )
    )
)
