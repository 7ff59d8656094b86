"""Shared fixtures: a small user/product schema with query and mutation roots."""

import pytest

from minigql.core import (
    Executor,
    FieldDefinition,
    QueryParser,
    Schema,
    list_of,
    non_null,
    object_type,
    scalar,
)

ALICE = {
    "id": "1",
    "name": "Alice",
    "email": "alice@example.com",
    "age": 30,
    "status": "active",
    "isActive": True,
}
BOB = {
    "id": "2",
    "name": "Bob",
    "email": "bob@example.com",
    "age": 25,
    "status": "inactive",
    "isActive": False,
}


def _raise_resolver_error(root, args):
    raise RuntimeError("Something went wrong in the resolver!")


@pytest.fixture
def user_type():
    return object_type(
        "User",
        {
            "id": FieldDefinition(non_null(scalar("ID")), "The user ID."),
            "name": FieldDefinition(scalar("String"), "The user name."),
            "email": FieldDefinition(non_null(scalar("String")), "The user email."),
            "age": FieldDefinition(
                scalar("Int"),
                "The user age.",
                resolve=lambda user, args: user.get("age"),
            ),
            "status": FieldDefinition(scalar("String"), "The user status."),
            "isActive": FieldDefinition(scalar("Boolean"), "Whether the account is active."),
        },
        description="A test user object.",
    )


@pytest.fixture
def product_type():
    return object_type(
        "Product",
        {
            "id": FieldDefinition(non_null(scalar("ID"))),
            "name": FieldDefinition(scalar("String")),
            "price": FieldDefinition(scalar("Float")),
        },
    )


@pytest.fixture
def query_type(user_type, product_type):
    def resolve_user(root, args):
        if isinstance(root, dict) and "user" in root:
            return root["user"]
        return ALICE

    return object_type(
        "Query",
        {
            "hello": FieldDefinition(
                scalar("String"), "A simple greeting.", resolve=lambda root, args: "World"
            ),
            "user": FieldDefinition(user_type, "Fetches a single user.", resolve=resolve_user),
            "users": FieldDefinition(
                list_of(user_type), resolve=lambda root, args: [ALICE, BOB]
            ),
            "product": FieldDefinition(
                product_type,
                resolve=lambda root, args: {"id": "P1", "name": "Laptop", "price": 1200.50},
            ),
            "nullableString": FieldDefinition(
                scalar("String"), resolve=lambda root, args: None
            ),
            "nonNullableString": FieldDefinition(
                non_null(scalar("String")), resolve=lambda root, args: "I am not null"
            ),
            "nonNullableStringNullResolver": FieldDefinition(
                non_null(scalar("String")), resolve=lambda root, args: None
            ),
            "listOfString": FieldDefinition(
                list_of(scalar("String")),
                resolve=lambda root, args: ["apple", "banana", "cherry"],
            ),
            "listOfNonNullString": FieldDefinition(
                list_of(non_null(scalar("String"))),
                resolve=lambda root, args: ["one", "two", "three"],
            ),
            "listOfNonNullStringWithNull": FieldDefinition(
                list_of(non_null(scalar("String"))),
                resolve=lambda root, args: ["valid", None, "another_valid"],
            ),
            "errorField": FieldDefinition(scalar("String"), resolve=_raise_resolver_error),
        },
    )


@pytest.fixture
def mutation_type(user_type):
    return object_type(
        "Mutation",
        {
            "createUser": FieldDefinition(
                user_type,
                "Creates a new user.",
                resolve=lambda root, args: {
                    "id": "new-123",
                    "name": "New User",
                    "email": "new@example.com",
                    "age": 22,
                    "status": "active",
                    "isActive": True,
                },
            ),
            "updateUserStatus": FieldDefinition(
                non_null(scalar("Boolean")), resolve=lambda root, args: True
            ),
        },
    )


@pytest.fixture
def schema(query_type, mutation_type):
    return Schema(query_type, mutation_type)


@pytest.fixture
def executor(schema):
    return Executor(schema)


@pytest.fixture
def run(executor):
    """Parse and execute query text against the shared schema."""
    parser = QueryParser()

    def _run(query, root_value=None):
        parsed = parser.parse(query)
        return executor.execute(parsed.operation_type, parsed.selections, root_value)

    return _run
