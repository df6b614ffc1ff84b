"""
Oracle catalog backed by oracledb.

Reads column and foreign key metadata from the Oracle data dictionary views
and runs the generated DDL on the same connection.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from view_synth.exceptions import CatalogError, ExecutionError
from view_synth.metadata.base import CatalogIntrospector
from view_synth.models import ColumnMetadata

logger = logging.getLogger(__name__)


class OracleCatalog(CatalogIntrospector):
    """
    Catalog introspection over an Oracle database.

    Uses Oracle data dictionary views:
    - ALL_TAB_COLUMNS
    - ALL_CONSTRAINTS / ALL_CONS_COLUMNS
    - ALL_OBJECTS

    Driver errors raised while connecting or querying the dictionary surface
    as CatalogError; errors from the generated DDL surface as ExecutionError.
    """

    def __init__(self, connection_string: Optional[str] = None, connection: Any = None):
        """
        Initialize catalog with an Oracle connection.

        Args:
            connection_string: Oracle connection string (user/pwd@host:port/service)
            connection: An already open DB-API connection to use instead
        """
        self.connection_string = connection_string
        self._conn = connection
        self._owns_connection = connection is None
        self._current_schema: Optional[str] = None

    def connect(self) -> None:
        """Establish database connection."""
        import oracledb

        if not self.connection_string:
            raise CatalogError("No Oracle connection string configured")

        # Parse connection string: user/pwd@host:port/service
        parts = self.connection_string.split("@")
        user_pwd = parts[0]
        host_service = parts[1] if len(parts) > 1 else ""

        user, password = user_pwd.split("/", 1) if "/" in user_pwd else (user_pwd, "")

        try:
            if ":" in host_service:
                host_port, service = host_service.rsplit("/", 1) if "/" in host_service else (host_service, "")
                host, port = host_port.split(":") if ":" in host_port else (host_port, "1521")
                dsn = oracledb.makedsn(host, int(port), service_name=service)
            else:
                dsn = host_service
            self._conn = oracledb.connect(user=user, password=password, dsn=dsn)
        except ValueError as e:
            raise CatalogError(f"Invalid Oracle connection string: {e}") from e
        except oracledb.Error as e:
            raise CatalogError(f"Could not connect to Oracle as {user}: {e}") from e

        self._owns_connection = True
        logger.info(f"Connected to Oracle database as {user}")

    def disconnect(self) -> None:
        """Close database connection if this catalog opened it."""
        if self._conn and self._owns_connection:
            self._conn.close()
            self._conn = None

    def __enter__(self):
        if not self._conn:
            self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()

    def _cursor(self):
        import oracledb

        if not self._conn:
            self.connect()
        try:
            return self._conn.cursor()
        except oracledb.Error as e:
            raise CatalogError(f"Could not open cursor: {e}") from e

    def _query(self, sql: str, **binds) -> List[Tuple]:
        """Run a dictionary query and return all rows."""
        import oracledb

        cursor = self._cursor()
        try:
            cursor.execute(sql, **binds)
            return cursor.fetchall()
        except oracledb.Error as e:
            raise CatalogError(f"Catalog query failed: {e}") from e
        finally:
            cursor.close()

    def current_schema(self) -> str:
        """Session schema, cached for the life of the connection."""
        if self._current_schema is None:
            rows = self._query("SELECT SYS_CONTEXT('USERENV', 'CURRENT_SCHEMA') FROM dual")
            if not rows or not rows[0][0]:
                raise CatalogError("Could not determine the session schema")
            self._current_schema = rows[0][0].upper()
        return self._current_schema

    def columns_of(self, schema: str, table: str) -> List[ColumnMetadata]:
        """Get column metadata for a table, ordered by column_id."""
        rows = self._query("""
            SELECT column_name, column_id, data_type, nullable
            FROM all_tab_columns
            WHERE owner = :owner AND table_name = :table_name
            ORDER BY column_id
        """, owner=schema.upper(), table_name=table.upper())

        columns = [
            ColumnMetadata(
                name=col_name,
                position=column_id,
                data_type=data_type,
                nullable=nullable == "Y",
            )
            for col_name, column_id, data_type, nullable in rows
        ]

        if not columns:
            logger.warning(f"No visible columns for {schema}.{table}")
        return columns

    def foreign_key_join(
        self,
        schema_a: str,
        table_a: str,
        schema_b: str,
        table_b: str,
    ) -> Optional[List[Tuple[str, str]]]:
        """Column pairs of the first FK on table_a referencing table_b."""
        rows = self._query("""
            SELECT
                c.constraint_name,
                cc.column_name as child_col,
                rcc.column_name as parent_col
            FROM all_constraints c
            JOIN all_cons_columns cc
                ON c.owner = cc.owner
                AND c.constraint_name = cc.constraint_name
            JOIN all_constraints rc
                ON c.r_owner = rc.owner
                AND c.r_constraint_name = rc.constraint_name
            JOIN all_cons_columns rcc
                ON rc.owner = rcc.owner
                AND rc.constraint_name = rcc.constraint_name
                AND cc.position = rcc.position
            WHERE c.constraint_type = 'R'
                AND c.owner = :child_owner
                AND c.table_name = :child_table
                AND rc.owner = :parent_owner
                AND rc.table_name = :parent_table
            ORDER BY c.constraint_name, cc.position
        """,
            child_owner=schema_a.upper(),
            child_table=table_a.upper(),
            parent_owner=schema_b.upper(),
            parent_table=table_b.upper(),
        )

        if not rows:
            return None

        first_constraint = rows[0][0]
        pairs = [(child, parent) for name, child, parent in rows if name == first_constraint]
        logger.debug(
            f"FK {first_constraint}: {schema_a}.{table_a} -> {schema_b}.{table_b} on {pairs}"
        )
        return pairs

    def object_exists(self, schema: str, name: str) -> bool:
        rows = self._query("""
            SELECT COUNT(*)
            FROM all_objects
            WHERE owner = :owner AND object_name = :object_name
        """, owner=schema.upper(), object_name=name.upper())
        return rows[0][0] > 0

    def execute(self, sql: str) -> None:
        """Run a DDL statement; driver errors become ExecutionError."""
        import oracledb

        cursor = self._cursor()
        try:
            cursor.execute(sql)
        except oracledb.Error as e:
            raise ExecutionError(f"Statement failed: {e}", sql=sql) from e
        finally:
            cursor.close()
