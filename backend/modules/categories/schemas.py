"""
Request schemas for category endpoints.
"""

from modules.validation import RequestSchema
from modules.validation.fields import choice, hex_color, obj, object_id, string

ENTRY_TYPES = ("income", "expense")

category_id_params = obj(object_id("id", message="Invalid category ID"))

create_category_schema = RequestSchema(
    body=obj(
        string("name", max_length=50),
        choice("type", ENTRY_TYPES, message="Type must be either income or expense"),
        string("icon", required=False, max_length=50),
        hex_color(),
    )
)

update_category_schema = RequestSchema(
    body=obj(
        string("name", required=False, max_length=50),
        string("icon", required=False, max_length=50),
        hex_color(),
    ),
    params=category_id_params,
)

category_id_schema = RequestSchema(params=category_id_params)

category_query_schema = RequestSchema(
    query=obj(choice("type", ENTRY_TYPES, required=False, message="Type must be either income or expense"))
)
