"""
Request schemas for transaction endpoints.
"""

from modules.validation import RequestSchema
from modules.validation.fields import (
    amount,
    choice,
    datetime_field,
    month,
    obj,
    object_id,
    optional,
    string,
    year,
)

ENTRY_TYPES = ("income", "expense")
TYPE_MESSAGE = "Type must be either income or expense"

transaction_id_params = obj(object_id("id", message="Invalid transaction ID"))

create_transaction_schema = RequestSchema(
    body=obj(
        choice("type", ENTRY_TYPES, message=TYPE_MESSAGE),
        amount(),
        string("category"),
        string("description", required=False, min_length=None, max_length=500),
        datetime_field("date", required=False),
    )
)

update_transaction_schema = RequestSchema(
    body=obj(
        choice("type", ENTRY_TYPES, required=False, message=TYPE_MESSAGE),
        optional(amount()),
        string("category", required=False),
        string("description", required=False, min_length=None, max_length=500),
        datetime_field("date", required=False),
    ),
    params=transaction_id_params,
)

transaction_id_schema = RequestSchema(params=transaction_id_params)

transaction_query_schema = RequestSchema(
    query=obj(
        month(),
        year(),
        string("category", required=False),
        choice("type", ENTRY_TYPES, required=False, message=TYPE_MESSAGE),
        datetime_field("startDate", required=False),
        datetime_field("endDate", required=False),
    )
)

summary_query_schema = RequestSchema(
    query=obj(
        month(),
        year(),
        datetime_field("startDate", required=False),
        datetime_field("endDate", required=False),
    )
)
