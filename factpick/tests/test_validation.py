"""
Tests for authoring-time dataset validation.
"""

from ..loaders.validation import validate_dataset


class TestValidDatasets:
    """Tests for datasets that pass."""

    def test_discrete_dataset(self, discrete_dataset):
        result = validate_dataset(discrete_dataset)

        assert result.valid
        assert result.errors == []
        assert result.pick_count == 4
        assert result.fact_count == 4
        assert result.property_count == 0

    def test_numeric_dataset(self, numeric_dataset):
        result = validate_dataset(numeric_dataset)

        assert result.valid
        assert result.property_count == 1


class TestStructureErrors:
    """Tests for missing or malformed structure."""

    def test_not_an_object(self):
        result = validate_dataset(["picks"])
        assert not result.valid
        assert result.errors == ["Missing or invalid 'picks' array"]

    def test_missing_picks(self):
        assert validate_dataset({}).errors == ["Missing or invalid 'picks' array"]

    def test_empty_picks(self):
        assert validate_dataset({"picks": []}).errors == ["No picks defined in dataset"]

    def test_reports_every_problem(self):
        data = {"picks": [
            {"id": "a", "facts": [{"description": "F", "category": "C"}]},
            {"id": "a", "name": "Again", "facts": [{"category": "C"}]},
            "not a pick",
        ]}
        result = validate_dataset(data)

        assert not result.valid
        assert "Pick a is missing a 'name' field" in result.errors
        assert "Duplicate pick id: a" in result.errors
        assert "Pick a: fact at index 0 is missing a 'description' field" in result.errors
        assert "Pick at index 2 is not an object" in result.errors

    def test_missing_id(self):
        result = validate_dataset({"picks": [{"name": "A", "facts": []}]})
        assert "Pick at index 0 is missing an 'id' field" in result.errors

    def test_mixed_shapes(self):
        data = {"picks": [
            {"id": "a", "name": "A", "facts": []},
            {"id": "b", "name": "B", "properties": {"P": 1}},
        ]}
        assert "Dataset mixes 'facts' and 'properties' records" in validate_dataset(data).errors

    def test_neither_shape(self):
        result = validate_dataset({"picks": [{"id": "a", "name": "A"}]})
        assert "Dataset picks carry neither 'facts' nor 'properties'" in result.errors

    def test_non_numeric_property(self):
        data = {"picks": [{"id": "a", "name": "A", "properties": {"P": "tall", "Q": True}}]}
        errors = validate_dataset(data).errors

        assert "Pick a: property 'P' is not a number" in errors
        assert "Pick a: property 'Q' is not a number" in errors

    def test_missing_category(self):
        data = {"picks": [{"id": "a", "name": "A", "facts": [{"description": "F"}]}]}
        assert "Pick a: fact 'F' is missing a 'category' field" in validate_dataset(data).errors


class TestWarnings:
    """Tests for datasets that load but play badly."""

    def test_too_few_picks(self):
        data = {"picks": [
            {"id": "a", "name": "A", "facts": [{"description": "F", "category": "C"}]},
            {"id": "b", "name": "B", "facts": []},
        ]}
        result = validate_dataset(data, options_per_question=3)

        assert result.valid
        assert "Only 2 pick(s); questions need 3 options" in result.warnings

    def test_pick_without_attributes(self, discrete_dataset):
        discrete_dataset["picks"].append({"id": "empty", "name": "Empty", "facts": []})
        result = validate_dataset(discrete_dataset)

        assert result.valid
        assert "1 pick(s) have no facts or properties assigned" in result.warnings

    def test_universal_fact(self):
        fact = {"description": "EXISTS", "category": "C"}
        data = {"picks": [
            {"id": "a", "name": "A", "facts": [fact]},
            {"id": "b", "name": "B", "facts": [fact, fact]},
        ]}
        result = validate_dataset(data, options_per_question=2)

        assert result.warnings == [
            "Fact 'EXISTS' is held by every pick and can never be asked"
        ]
