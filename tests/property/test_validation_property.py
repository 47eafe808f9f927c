import pytest
from hypothesis import given
from hypothesis import strategies as st

from aibuilder.core.validation import ValidationError, validate_create
from aibuilder.models.project import ProjectStatus

_STATUS_VALUES = {member.value for member in ProjectStatus}


@given(st.sampled_from(list(ProjectStatus)), st.data())
def test_status_accepts_enum_values_in_any_case(status: ProjectStatus, data: st.DataObject) -> None:
    upper = data.draw(
        st.lists(st.booleans(), min_size=len(status.value), max_size=len(status.value))
    )
    spelled = "".join(
        char.upper() if flip else char for char, flip in zip(status.value, upper, strict=True)
    )
    assert validate_create({"name": "A", "status": spelled}).status is status


@given(st.text().filter(lambda value: value.strip().lower() not in _STATUS_VALUES))
def test_status_rejects_other_strings(value: str) -> None:
    with pytest.raises(ValidationError) as info:
        validate_create({"name": "A", "status": value})
    assert info.value.field == "status"


@given(st.text(alphabet=" \t\n\r\x0b\x0c", max_size=12))
def test_whitespace_names_are_rejected(name: str) -> None:
    with pytest.raises(ValidationError) as info:
        validate_create({"name": name})
    assert info.value.field == "name"


@given(
    st.one_of(
        st.none(),
        st.booleans(),
        st.integers(),
        st.floats(allow_nan=False),
        st.lists(st.text(), max_size=3),
    )
)
def test_non_string_names_are_rejected(name: object) -> None:
    with pytest.raises(ValidationError) as info:
        validate_create({"name": name})
    assert info.value.field == "name"


@given(st.text(min_size=1).filter(lambda value: value.strip() != ""), st.text())
def test_valid_names_are_trimmed_and_descriptions_kept(name: str, description: str) -> None:
    draft = validate_create({"name": name, "description": description})
    assert draft.name == name.strip()
    assert draft.name
    assert draft.description == description
    assert draft.status is ProjectStatus.DRAFT
