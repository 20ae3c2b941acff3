"""GraphQL schema tests: queries and mutations executed against in-memory services."""

import asyncio

import pytest

from api.container import build_services
from api.context import PhonebookContext
from api.schema import schema
from phonebook.config import Settings

ADD_PERSON = """
mutation ($name: String!, $phone: String, $street: String!, $city: String!) {
  addPerson(name: $name, phone: $phone, street: $street, city: $city) {
    id name phone address { street city }
  }
}
"""

LOGIN = """
mutation ($username: String!, $password: String!) {
  login(input: {username: $username, password: $password}) { value }
}
"""


@pytest.fixture
def services():
    return build_services(Settings(jwt_secret="test-secret"))


def _execute(services, query, variables=None, authorization=None):
    context = PhonebookContext(services, authorization=authorization)
    return asyncio.run(schema.execute(query, variable_values=variables, context_value=context))


def _bearer(services, username="mluukkai"):
    result = _execute(services, "mutation ($u: String!) { createUser(username: $u) { id } }", {"u": username})
    assert result.errors is None
    token = _execute(services, LOGIN, {"username": username, "password": "plusultra"})
    return f"Bearer {token.data['login']['value']}"


def _add(services, auth, name="Arto Hellas", phone="040-123543", street="Tapiolankatu 5 A", city="Espoo"):
    return _execute(
        services,
        ADD_PERSON,
        {"name": name, "phone": phone, "street": street, "city": city},
        authorization=auth,
    )


def test_add_person_returns_person_with_address(services):
    auth = _bearer(services)
    result = _add(services, auth)

    assert result.errors is None
    person = result.data["addPerson"]
    assert person["name"] == "Arto Hellas"
    assert person["phone"] == "040-123543"
    assert person["address"] == {"street": "Tapiolankatu 5 A", "city": "Espoo"}
    assert person["id"]


def test_add_person_anonymous_is_unauthenticated(services):
    result = _add(services, None)

    assert result.data == {"addPerson": None}
    assert result.errors[0].message == "not authenticated"
    assert result.errors[0].extensions["code"] == "UNAUTHENTICATED"
    assert _execute(services, "{ personCount }").data == {"personCount": 0}


def test_add_person_duplicate_reports_invalid_args(services):
    auth = _bearer(services)
    _add(services, auth)
    result = _add(services, auth, street="Other 1")

    error = result.errors[0]
    assert error.extensions["code"] == "BAD_USER_INPUT"
    assert error.extensions["invalidArgs"]["name"] == "Arto Hellas"
    assert _execute(services, "{ personCount }").data == {"personCount": 1}


def test_all_persons_filter(services):
    auth = _bearer(services)
    _add(services, auth, name="Arto Hellas", phone="040-123543")
    _add(services, auth, name="Venla Ruuskanen", phone=None)

    query = "query ($phone: YesNo) { allPersons(phone: $phone) { name } }"
    everyone = _execute(services, query).data["allPersons"]
    with_phone = _execute(services, query, {"phone": "YES"}).data["allPersons"]
    without_phone = _execute(services, query, {"phone": "NO"}).data["allPersons"]

    assert [p["name"] for p in everyone] == ["Arto Hellas", "Venla Ruuskanen"]
    assert with_phone == [{"name": "Arto Hellas"}]
    assert without_phone == [{"name": "Venla Ruuskanen"}]


def test_find_person(services):
    auth = _bearer(services)
    _add(services, auth)
    query = "query ($name: String!) { findPerson(name: $name) { name address { city } } }"

    assert _execute(services, query, {"name": "Arto Hellas"}).data == {
        "findPerson": {"name": "Arto Hellas", "address": {"city": "Espoo"}}
    }
    missing = _execute(services, query, {"name": "Nobody"})
    assert missing.errors is None
    assert missing.data == {"findPerson": None}


def test_me_with_and_without_token(services):
    auth = _bearer(services)
    _add(services, auth)
    query = "{ me { username friends { name } } }"

    assert _execute(services, query, authorization=auth).data == {
        "me": {"username": "mluukkai", "friends": [{"name": "Arto Hellas"}]}
    }
    assert _execute(services, query).data == {"me": None}


def test_bad_token_fails_identity_fields_only(services):
    result = _execute(services, "{ personCount me { username } }", authorization="Bearer forged.token.value")

    assert result.data == {"personCount": 0, "me": None}
    assert len(result.errors) == 1
    assert result.errors[0].path == ["me"]
    assert result.errors[0].extensions["code"] == "UNAUTHENTICATED"


def test_edit_number(services):
    auth = _bearer(services)
    added = _add(services, auth).data["addPerson"]
    mutation = """
    mutation ($name: String!, $phone: String!) {
      editNumber(input: {name: $name, phone: $phone}) { id name phone address { street city } }
    }
    """

    edited = _execute(services, mutation, {"name": "Arto Hellas", "phone": "050-1"}, authorization=auth)
    assert edited.data["editNumber"] == {**added, "phone": "050-1"}

    missing = _execute(services, mutation, {"name": "Nobody", "phone": "050-1"}, authorization=auth)
    assert missing.data == {"editNumber": None}
    assert missing.errors[0].extensions["code"] == "NOT_FOUND"


def test_create_user_duplicate(services):
    mutation = "mutation { createUser(username: \"mluukkai\") { username friends { id } } }"
    assert _execute(services, mutation).data == {"createUser": {"username": "mluukkai", "friends": []}}

    again = _execute(services, mutation)
    assert again.data == {"createUser": None}
    assert again.errors[0].extensions == {"code": "BAD_USER_INPUT", "invalidArgs": "mluukkai"}


def test_login_wrong_password(services):
    _bearer(services)
    result = _execute(services, LOGIN, {"username": "mluukkai", "password": "nope"})
    assert result.data == {"login": None}
    assert result.errors[0].message == "wrong credentials"


def test_add_as_friend_twice(services):
    owner = _bearer(services, "owner")
    other = _bearer(services, "other")
    _add(services, owner)
    mutation = "mutation { addAsFriend(name: \"Arto Hellas\") { username friends { name } } }"

    _execute(services, mutation, authorization=other)
    result = _execute(services, mutation, authorization=other)

    assert result.data == {"addAsFriend": {"username": "other", "friends": [{"name": "Arto Hellas"}]}}


def test_add_as_friend_unknown_person(services):
    auth = _bearer(services)
    result = _execute(services, "mutation { addAsFriend(name: \"Nobody\") { username } }", authorization=auth)
    assert result.errors[0].extensions["code"] == "NOT_FOUND"


def test_sibling_fields_survive_a_failing_mutation(services):
    auth = _bearer(services)
    result = _execute(
        services,
        """
        mutation {
          missing: addAsFriend(name: "Nobody") { username }
          created: addPerson(name: "Arto Hellas", street: "S", city: "C") { name }
        }
        """,
        authorization=auth,
    )
    assert result.data == {"missing": None, "created": {"name": "Arto Hellas"}}
    assert [e.path for e in result.errors] == [["missing"]]


def test_name_lookups_strip_whitespace(services):
    auth = _bearer(services)
    _add(services, auth, name="Arto Hellas ")
    find = "query ($name: String!) { findPerson(name: $name) { name } }"
    edit = "mutation ($name: String!) { editNumber(input: {name: $name, phone: \"050-1\"}) { phone } }"

    assert _execute(services, find, {"name": " Arto Hellas "}).data == {"findPerson": {"name": "Arto Hellas"}}
    edited = _execute(services, edit, {"name": "Arto Hellas "}, authorization=auth)
    assert edited.errors is None
    assert edited.data == {"editNumber": {"phone": "050-1"}}


def test_create_user_empty_password(services):
    mutation = "mutation { createUser(username: \"hellas\", password: \"\") { id } }"
    result = _execute(services, mutation)
    assert result.data == {"createUser": None}
    assert result.errors[0].extensions == {"code": "BAD_USER_INPUT", "invalidArgs": "hellas"}

    login = _execute(services, LOGIN, {"username": "hellas", "password": "plusultra"})
    assert login.errors[0].message == "wrong credentials"
