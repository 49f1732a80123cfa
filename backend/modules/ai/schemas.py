"""
Request schemas for AI assistant endpoints.
"""

from modules.validation import RequestSchema
from modules.validation.fields import obj, string

query_schema = RequestSchema(body=obj(string("message", max_length=2000)))
