"""
End-to-end tests executing GraphQL documents against the Strawberry schema
"""

import pytest

from thoughtboard.auth.context import ANONYMOUS, AuthContext
from thoughtboard.graphql.schema import schema, validate_schema

ADD_USER = """
mutation AddUser($username: String!, $email: String!, $password: String!) {
  addUser(username: $username, email: $email, password: $password) {
    token
    user { _id username email friendCount }
  }
}
"""

LOGIN = """
mutation Login($email: String!, $password: String!) {
  login(email: $email, password: $password) { token user { username } }
}
"""

ME = """
query Me {
  me {
    _id
    username
    friendCount
    friends { username friendCount thoughts { thoughtText } }
    thoughts { thoughtText reactionCount }
  }
}
"""


def make_context(store, tokens, auth=ANONYMOUS):
    return {"store": store, "tokens": tokens, "auth": auth}


async def register(store, tokens, username):
    result = await schema.execute(
        ADD_USER,
        variable_values={
            "username": username,
            "email": f"{username}@example.com",
            "password": f"{username}-password",
        },
        context_value=make_context(store, tokens),
    )
    assert result.errors is None
    payload = result.data["addUser"]
    auth = AuthContext(identity=tokens.verify_token(payload["token"]), token=payload["token"])
    return payload["user"], auth


def test_schema_is_valid():
    validate_schema()


def test_user_type_has_no_password_field():
    user_type = schema.get_type_by_name("User")
    field_names = {field.python_name for field in user_type.fields}
    assert "password" not in field_names
    assert "password" not in str(schema).split("type User")[1].split("}")[0]


def test_add_thought_takes_no_username_argument():
    sdl = str(schema)
    assert "addThought(thoughtText: String!): Thought!" in sdl


@pytest.mark.asyncio
async def test_add_user_and_login(store, tokens):
    user, _ = await register(store, tokens, "alice")
    assert user["username"] == "alice"
    assert user["friendCount"] == 0

    result = await schema.execute(
        LOGIN,
        variable_values={"email": "alice@example.com", "password": "alice-password"},
        context_value=make_context(store, tokens),
    )
    assert result.errors is None
    assert result.data["login"]["user"]["username"] == "alice"


@pytest.mark.asyncio
async def test_login_failure_is_an_error_with_code(store, tokens):
    await register(store, tokens, "alice")

    result = await schema.execute(
        LOGIN,
        variable_values={"email": "alice@example.com", "password": "wrong"},
        context_value=make_context(store, tokens),
    )
    assert result.data is None
    assert result.errors[0].message == "Incorrect credentials"
    assert result.errors[0].extensions["code"] == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_me_unauthenticated_is_an_error_not_null(store, tokens):
    result = await schema.execute(ME, context_value=make_context(store, tokens))

    assert result.errors is not None
    assert result.errors[0].message == "Not logged in"
    assert result.errors[0].extensions["code"] == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_full_flow(store, tokens):
    alice, alice_auth = await register(store, tokens, "alice")
    bob, bob_auth = await register(store, tokens, "bob")

    result = await schema.execute(
        'mutation { addThought(thoughtText: "bob thinks") { _id username } }',
        context_value=make_context(store, tokens, bob_auth),
    )
    assert result.errors is None
    thought_id = result.data["addThought"]["_id"]
    assert result.data["addThought"]["username"] == "bob"

    result = await schema.execute(
        """
        mutation React($id: ID!) {
          addReaction(thoughtId: $id, reactionBody: "love it") {
            reactionCount
            reactions { reactionBody username createdAt }
          }
        }
        """,
        variable_values={"id": thought_id},
        context_value=make_context(store, tokens, alice_auth),
    )
    assert result.errors is None
    reacted = result.data["addReaction"]
    assert reacted["reactionCount"] == 1
    assert reacted["reactions"][0]["username"] == "alice"

    for _ in range(2):
        result = await schema.execute(
            "mutation Add($id: ID!) { addFriend(friendId: $id) { friendCount } }",
            variable_values={"id": bob["_id"]},
            context_value=make_context(store, tokens, alice_auth),
        )
        assert result.errors is None
        assert result.data["addFriend"]["friendCount"] == 1

    result = await schema.execute(ME, context_value=make_context(store, tokens, alice_auth))
    assert result.errors is None
    me = result.data["me"]
    assert me["username"] == "alice"
    assert me["friendCount"] == 1
    # Second level is loaded on demand
    assert me["friends"] == [
        {"username": "bob", "friendCount": 0, "thoughts": [{"thoughtText": "bob thinks"}]}
    ]
    assert me["thoughts"] == []


@pytest.mark.asyncio
async def test_thought_queries(store, tokens):
    _, alice_auth = await register(store, tokens, "alice")
    created = await schema.execute(
        'mutation { addThought(thoughtText: "hi") { _id } }',
        context_value=make_context(store, tokens, alice_auth),
    )
    thought_id = created.data["addThought"]["_id"]

    result = await schema.execute(
        """
        query Lookup($id: ID!) {
          thought(_id: $id) { thoughtText }
          missing: thought(_id: "nope") { thoughtText }
          thoughts(username: "alice") { thoughtText }
          user(username: "alice") { thoughts { thoughtText } }
          nobody: user(username: "nobody") { username }
          users { username }
        }
        """,
        variable_values={"id": thought_id},
        context_value=make_context(store, tokens),
    )
    assert result.errors is None
    assert result.data["thought"] == {"thoughtText": "hi"}
    assert result.data["missing"] is None
    assert result.data["thoughts"] == [{"thoughtText": "hi"}]
    assert result.data["user"] == {"thoughts": [{"thoughtText": "hi"}]}
    assert result.data["nobody"] is None
    assert result.data["users"] == [{"username": "alice"}]


@pytest.mark.asyncio
async def test_add_reaction_to_missing_thought_is_null(store, tokens):
    _, alice_auth = await register(store, tokens, "alice")

    result = await schema.execute(
        'mutation { addReaction(thoughtId: "nope", reactionBody: "hi") { _id } }',
        context_value=make_context(store, tokens, alice_auth),
    )
    assert result.errors is None
    assert result.data["addReaction"] is None
