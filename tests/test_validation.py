import pytest

from timesheet.errors import InvalidRate, InvalidTime, MissingDescription, MissingField, ValidationError
from timesheet.models import EntryDraft
from timesheet.validation import validate_draft


def valid_draft(**overrides) -> EntryDraft:
    values = dict(
        project_name="Data lake",
        project_type="Engenharia de Dados",
        user="Lavezzo",
        start_time="09:00",
        end_time="18:00",
    )
    values.update(overrides)
    return EntryDraft(**values)


def test_valid_draft_passes():
    validate_draft(valid_draft())
    validate_draft(valid_draft(user="Outro", custom_rate="80"))
    validate_draft(valid_draft(project_type="Outros", other_project_name="Consultoria"))


@pytest.mark.parametrize("field", ["project_name", "project_type", "user", "start_time", "end_time"])
def test_each_required_field(field):
    with pytest.raises(MissingField):
        validate_draft(valid_draft(**{field: ""}))


def test_whitespace_only_counts_as_missing():
    with pytest.raises(MissingField):
        validate_draft(valid_draft(project_name="   "))


def test_unknown_choices_are_missing_fields():
    with pytest.raises(MissingField):
        validate_draft(valid_draft(project_type="Marketing"))
    with pytest.raises(MissingField):
        validate_draft(valid_draft(user="Someone"))


def test_other_project_type_requires_description():
    with pytest.raises(MissingDescription):
        validate_draft(valid_draft(project_type="Outros", other_project_name=""))


@pytest.mark.parametrize("rate", ["0", "-5", "", "abc"])
def test_generic_user_requires_positive_rate(rate):
    with pytest.raises(InvalidRate):
        validate_draft(valid_draft(user="Outro", custom_rate=rate))


def test_first_failing_rule_wins():
    draft = valid_draft(project_name="", project_type="Outros", user="Outro", custom_rate="0")

    with pytest.raises(MissingField):
        validate_draft(draft)

    draft.project_name = "Ad hoc"
    with pytest.raises(MissingDescription):
        validate_draft(draft)


def test_malformed_times_are_rejected():
    with pytest.raises(InvalidTime):
        validate_draft(valid_draft(end_time="25:00"))


def test_errors_carry_distinct_messages():
    messages = {cls().message for cls in (MissingField, MissingDescription, InvalidRate, InvalidTime)}

    assert len(messages) == 4
    assert issubclass(InvalidRate, ValidationError)
