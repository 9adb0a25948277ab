"""API Key 资源 Schema 定义模块."""

from ..resource import with_connection_schema
from ..schema import (
    Field,
    FieldType,
    Schema,
    all_of,
    string_len_between,
    string_match,
)

# 与 POSIX [[:graph:]] 等价：Basic Latin 中除空白外的可打印字符
API_KEY_NAME_PATTERN = r"[\x21-\x7e]+"

FIELD_SECURITY_SCHEMA: Schema = {
    "grant": Field(
        FieldType.SET,
        description="List of the fields to grant the access to.",
        elem=FieldType.STRING,
    ),
    "except": Field(
        FieldType.SET,
        description="List of the fields to which the grants will not be applied.",
        elem=FieldType.STRING,
    ),
}

INDICES_SCHEMA: Schema = {
    "names": Field(
        FieldType.SET,
        description="A list of indices (or index name patterns) to which the "
        "permissions in this entry apply.",
        required=True,
        elem=FieldType.STRING,
    ),
    "privileges": Field(
        FieldType.SET,
        description="The index level privileges that the owners of the role have on "
        "the specified indices.",
        required=True,
        elem=FieldType.STRING,
    ),
    "field_security": Field(
        FieldType.LIST,
        description="The document fields that the owners of the role have read access to.",
        max_items=1,
        elem=FIELD_SECURITY_SCHEMA,
    ),
    "query": Field(
        FieldType.STRING,
        description="A search query that defines the documents the owners of the role "
        "have read access to.",
        json=True,
    ),
    "allow_restricted_indices": Field(
        FieldType.BOOL,
        description="Include matching restricted indices in names parameter.",
        default=False,
    ),
}

APPLICATIONS_SCHEMA: Schema = {
    "application": Field(
        FieldType.STRING,
        description="The name of the application to which this entry applies.",
        required=True,
    ),
    "privileges": Field(
        FieldType.SET,
        description="A list of strings, where each element is the name of an "
        "application privilege or action.",
        required=True,
        elem=FieldType.STRING,
    ),
    "resources": Field(
        FieldType.SET,
        description="A list resources to which the privileges are applied.",
        required=True,
        elem=FieldType.STRING,
    ),
}

ROLE_SCHEMA: Schema = {
    "cluster": Field(
        FieldType.SET,
        description="A list of cluster privileges.",
        elem=FieldType.STRING,
    ),
    "indices": Field(
        FieldType.SET,
        description="A list of indices permissions entries.",
        elem=INDICES_SCHEMA,
    ),
    "applications": Field(
        FieldType.SET,
        description="A list of application privilege entries.",
        elem=APPLICATIONS_SCHEMA,
    ),
    "global": Field(
        FieldType.STRING,
        description="An object defining global privileges.",
        json=True,
    ),
    "run_as": Field(
        FieldType.SET,
        description="A list of users that the owners of this role can impersonate.",
        elem=FieldType.STRING,
    ),
    "metadata": Field(
        FieldType.STRING,
        description="Optional meta-data.",
        json=True,
    ),
}

API_KEY_SCHEMA: Schema = with_connection_schema(
    {
        "key_id": Field(
            FieldType.STRING,
            description="Server assigned identifier of the API key.",
            computed=True,
        ),
        "name": Field(
            FieldType.STRING,
            description="Specifies the name for this API key.",
            required=True,
            force_new=True,
            validators=all_of(
                string_len_between(1, 1024),
                string_match(
                    API_KEY_NAME_PATTERN,
                    "must contain alphanumeric characters (a-z, A-Z, 0-9), spaces, "
                    "punctuation, and printable symbols in the Basic Latin (ASCII) block. "
                    "Leading or trailing whitespace is not allowed",
                ),
            ),
        ),
        "role_descriptors": Field(
            FieldType.MAP,
            description="Role descriptors for this API key, either as a JSON encoded "
            "object or as nested role blocks keyed by role name.",
            required=True,
            elem=ROLE_SCHEMA,
            json_string_allowed=True,
        ),
        "expiration": Field(
            FieldType.STRING,
            description="Expiration time for the API key. By default, API keys never expire.",
            force_new=True,
        ),
        "metadata": Field(
            FieldType.STRING,
            description="Arbitrary metadata that you want to associate with the API key.",
            optional=True,
            computed=True,
            json=True,
        ),
        "api_key": Field(
            FieldType.STRING,
            description="Generated API Key.",
            computed=True,
            sensitive=True,
        ),
        "encoded": Field(
            FieldType.STRING,
            description="API key credentials which is the Base64-encoding of the UTF-8 "
            "representation of the id and api_key joined by a colon.",
            computed=True,
            sensitive=True,
        ),
        "expiration_timestamp": Field(
            FieldType.INT,
            description="Expiration time in milliseconds for the API key.",
            computed=True,
        ),
    }
)
