"""Tests for core data models."""

import pytest

from view_synth.exceptions import InputError
from view_synth.models import (
    ColumnEntry,
    ColumnMetadata,
    ForeignKey,
    GenerationConfig,
    GenerationResult,
    JoinCondition,
    JoinedTable,
    SkippedTable,
    TableMetadata,
    TableRef,
    ViewPlan,
)


class TestTableRef:
    """Tests for TableRef parsing and identity."""

    def test_unqualified_uses_default_schema(self):
        ref = TableRef.parse("orders", "sales")
        assert ref.schema == "SALES"
        assert ref.name == "ORDERS"
        assert ref.raw_input == "orders"

    def test_qualified_name(self):
        ref = TableRef.parse("hr.Employees", "SALES")
        assert ref.schema == "HR"
        assert ref.name == "EMPLOYEES"
        assert ref.full_name == "HR.EMPLOYEES"

    def test_identity_ignores_raw_input(self):
        a = TableRef.parse("orders", "SALES")
        b = TableRef.parse("SALES.ORDERS", "HR")
        assert a == b
        assert a.key == ("SALES", "ORDERS")

    def test_quoted_name(self):
        ref = TableRef(schema="sales", name="orders")
        assert ref.quoted_name == '"SALES"."ORDERS"'


class TestColumnMetadata:
    """Tests for ColumnMetadata."""

    def test_describe(self):
        assert ColumnMetadata(name="ID", position=1).describe() == "ID"
        assert ColumnMetadata(name="ID", position=1, data_type="NUMBER").describe() == "ID NUMBER"
        col = ColumnMetadata(name="ID", position=1, data_type="NUMBER", nullable=False)
        assert col.describe() == "ID NUMBER NOT NULL"


class TestTableMetadata:
    """Tests for TableMetadata."""

    def test_full_name(self):
        table = TableMetadata(name="CUSTOMERS", schema="SALES")
        assert table.full_name == "SALES.CUSTOMERS"

    def test_from_dict_accepts_bare_column_names(self):
        table = TableMetadata.from_dict({
            "name": "ORDERS",
            "schema": "SALES",
            "columns": ["ORDER_ID", {"name": "STATUS", "data_type": "VARCHAR2"}],
        })
        assert [c.name for c in table.columns] == ["ORDER_ID", "STATUS"]
        assert table.columns[0].position == 1
        assert table.columns[1].position == 2
        assert table.columns[1].data_type == "VARCHAR2"

    def test_serialization(self):
        table = TableMetadata(
            name="T",
            schema="S",
            columns=[ColumnMetadata(name="A", position=1, data_type="NUMBER", nullable=False)],
        )
        restored = TableMetadata.from_dict(table.to_dict())
        assert restored.columns[0].name == "A"
        assert restored.columns[0].data_type == "NUMBER"
        assert restored.columns[0].nullable is False


class TestForeignKey:
    """Tests for ForeignKey."""

    def test_from_dict_qualifies_tables(self):
        fk = ForeignKey.from_dict(
            {
                "name": "FK_ORDERS_CUSTOMER",
                "child_table": "orders",
                "child_columns": ["customer_id"],
                "parent_table": "crm.customers",
                "parent_columns": ["customer_id"],
            },
            default_schema="SALES",
        )
        assert fk.child_schema == "SALES"
        assert fk.child_table == "ORDERS"
        assert fk.parent_schema == "CRM"
        assert fk.parent_table == "CUSTOMERS"
        assert fk.column_pairs == [("CUSTOMER_ID", "CUSTOMER_ID")]

    def test_default_name(self):
        fk = ForeignKey.from_dict({
            "child_table": "S.A",
            "child_columns": ["X"],
            "parent_table": "S.B",
            "parent_columns": ["Y"],
        })
        assert fk.name == "FK_A_B"

    def test_round_trip(self):
        fk = ForeignKey(
            name="FK_LINES",
            child_schema="S",
            child_table="SHIPMENTS",
            child_columns=["ORDER_ID", "LINE_NO"],
            parent_schema="S",
            parent_table="ORDER_LINES",
            parent_columns=["ORDER_ID", "LINE_NO"],
        )
        assert ForeignKey.from_dict(fk.to_dict()) == fk


class TestJoinCondition:
    """Tests for predicate rendering."""

    def test_single_pair(self):
        cond = JoinCondition(pairs=[("t2", "CUSTOMER_ID", "t1", "CUSTOMER_ID")])
        assert cond.render() == "t2.CUSTOMER_ID = t1.CUSTOMER_ID"

    def test_multi_column_is_and_combined(self):
        cond = JoinCondition(pairs=[
            ("t2", "ORDER_ID", "t1", "ORDER_ID"),
            ("t2", "LINE_NO", "t1", "LINE_NO"),
        ])
        assert cond.render() == "t2.ORDER_ID = t1.ORDER_ID AND t2.LINE_NO = t1.LINE_NO"


class TestGenerationConfig:
    """Tests for GenerationConfig loading."""

    def test_defaults(self):
        config = GenerationConfig()
        assert config.execute is True
        assert config.auto_rename is True

    def test_from_dict_with_comma_string(self):
        config = GenerationConfig.from_dict({
            "tables": "ORDERS, CUSTOMERS",
            "view_name": "ORDER_V",
            "execute": False,
        })
        assert config.tables == ["ORDERS", "CUSTOMERS"]
        assert config.view_name == "ORDER_V"
        assert config.execute is False
        assert config.auto_rename is True

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "view.yaml"
        path.write_text(
            "tables:\n"
            "  - HR.EMPLOYEES\n"
            "  - HR.DEPARTMENTS\n"
            "view_name: EMP_V\n"
            "auto_rename: false\n"
        )
        config = GenerationConfig.from_yaml(path)
        assert config.tables == ["HR.EMPLOYEES", "HR.DEPARTMENTS"]
        assert config.view_name == "EMP_V"
        assert config.auto_rename is False

    def test_yes_no_letters_from_yaml(self, tmp_path):
        path = tmp_path / "view.yaml"
        path.write_text(
            "tables: [ORDERS, CUSTOMERS]\n"
            "view_name: ORDER_V\n"
            "execute: N\n"
            "auto_rename: 'false'\n"
        )
        config = GenerationConfig.from_yaml(path)
        assert config.execute is False
        assert config.auto_rename is False

    @pytest.mark.parametrize("value,expected", [
        (True, True),
        (False, False),
        ("Y", True),
        ("n", False),
        ("Yes", True),
        ("NO", False),
        ("TRUE", True),
        (" false ", False),
    ])
    def test_flag_values(self, value, expected):
        config = GenerationConfig.from_dict({"execute": value, "auto_rename": value})
        assert config.execute is expected
        assert config.auto_rename is expected

    @pytest.mark.parametrize("value", ["maybe", 1, 0, "", [True]])
    def test_invalid_flag(self, value):
        with pytest.raises(InputError, match="execute"):
            GenerationConfig.from_dict({"execute": value})

    def test_missing_flags_use_defaults(self):
        config = GenerationConfig.from_dict({"execute": None})
        assert config.execute is True
        assert config.auto_rename is True

    def test_view_name_must_be_string(self):
        with pytest.raises(InputError, match="view_name"):
            GenerationConfig.from_dict({"tables": ["A"], "view_name": 2024})

    def test_tables_must_be_list(self):
        with pytest.raises(InputError, match="tables"):
            GenerationConfig.from_dict({"tables": {"A": 1}, "view_name": "V"})


class TestGenerationResult:
    """Tests for GenerationResult."""

    def test_to_dict_and_flags(self):
        anchor = TableRef(schema="S", name="A")
        other = TableRef(schema="S", name="B")
        lost = TableRef(schema="S", name="C")
        plan = ViewPlan(
            joined=[
                JoinedTable(table=anchor, alias="t1"),
                JoinedTable(
                    table=other,
                    alias="t2",
                    condition=JoinCondition(pairs=[("t2", "ID", "t1", "ID")], source="common_column"),
                ),
            ],
            columns=[ColumnEntry(name="ID", alias="t1", position=1)],
            skipped=[SkippedTable(table=lost, alias="t3")],
        )
        result = GenerationResult(
            view_name="V_V1",
            requested_name="V",
            sql="CREATE OR REPLACE VIEW V_V1 AS ...",
            executed=False,
            plan=plan,
        )

        assert result.renamed is True
        assert result.skipped_count == 1
        assert plan.anchor.is_anchor is True

        data = result.to_dict()
        assert data["joined"][0]["condition"] is None
        assert data["joined"][1]["condition"] == "t2.ID = t1.ID"
        assert data["skipped"] == [{"table": "S.C", "alias": "t3"}]
        assert data["columns"] == ["t1.ID"]
