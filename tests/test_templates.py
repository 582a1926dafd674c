"""Tests for the query template registry and builder."""

import re

import pytest
from catalog_scraper.catalog import FilterSet, ObjectType, QueryFamily
from catalog_scraper.catalog.object_types import IMPORT_ORDER, import_position
from catalog_scraper.catalog.queries import MIN_SERVER_VERSION
from catalog_scraper.catalog.templates import (
    TEMPLATES,
    build_query,
    has_template,
    registered_types,
    select_template,
)
from catalog_scraper.exceptions import UnsupportedObjectType, UnsupportedServerVersion

CATALOG_TYPES = [object_type for object_type in ObjectType if object_type != ObjectType.PERMISSION]


class TestRegistry:
    """Tests for the template registry."""

    @pytest.mark.parametrize("object_type", CATALOG_TYPES)
    def test_list_and_attributes_registered(self, object_type):
        """Every catalog-backed type has LIST and ATTRIBUTES templates."""
        assert has_template(QueryFamily.LIST, object_type)
        assert has_template(QueryFamily.ATTRIBUTES, object_type)

    def test_permission_not_registered(self):
        """Permissions have no catalog of their own."""
        with pytest.raises(UnsupportedObjectType) as exc_info:
            select_template(QueryFamily.ATTRIBUTES, ObjectType.PERMISSION)
        assert exc_info.value.object_type == "permission"
        assert exc_info.value.family == "attributes"

    def test_registry_is_read_only(self):
        """The registry cannot be modified after load."""
        with pytest.raises(TypeError):
            TEMPLATES[(QueryFamily.LIST, ObjectType.PERMISSION)] = ()

    def test_import_order_covers_every_type(self):
        """Every object type has a place in the import order."""
        ordered = {step.object_type for step in IMPORT_ORDER}
        assert ordered == set(ObjectType)

    def test_registered_types_are_ordered(self):
        """Every type with a template appears in the import order."""
        ordered = {step.object_type for step in IMPORT_ORDER}
        for family in QueryFamily:
            assert registered_types(family) <= ordered

    def test_import_order_sequence(self):
        """Roles come first and table internals after tables."""
        assert import_position(ObjectType.ROLE) == 0
        assert import_position(ObjectType.ROLE) < import_position(ObjectType.TABLESPACE)
        assert import_position(ObjectType.TABLESPACE) < import_position(ObjectType.DATABASE)
        assert import_position(ObjectType.DATABASE) < import_position(ObjectType.SCHEMA)
        assert import_position(ObjectType.SCHEMA) < import_position(ObjectType.EXTENSION)
        assert import_position(ObjectType.OPFAMILY) < import_position(ObjectType.OPCLASS)
        for object_type in (ObjectType.COLUMN, ObjectType.INDEX, ObjectType.TRIGGER, ObjectType.CONSTRAINT):
            assert import_position(ObjectType.TABLE) < import_position(object_type)
        assert IMPORT_ORDER[-1].object_type == ObjectType.PERMISSION

    def test_functions_imported_twice(self):
        """Built-in language functions precede user types, the rest follow user languages."""
        steps = [step for step in IMPORT_ORDER if step.object_type == ObjectType.FUNCTION]
        assert [step.builtin_language for step in steps] == [True, False]
        builtin, user = (IMPORT_ORDER.index(step) for step in steps)
        assert builtin < import_position(ObjectType.TYPE) < import_position(ObjectType.LANGUAGE) < user

    def test_comment_variant_for_shared_objects(self):
        """Cluster-wide objects read comments from pg_shdescription."""
        assert "pg_shdescription" in select_template(QueryFamily.COMMENT, ObjectType.DATABASE).text
        assert "pg_description" in select_template(QueryFamily.COMMENT, ObjectType.TABLE).text


class TestSelectTemplate:
    """Tests for version-sensitive template selection."""

    def test_newest_by_default(self):
        """Unknown server version picks the newest variant."""
        template = select_template(QueryFamily.ATTRIBUTES, ObjectType.FUNCTION)
        assert "prokind" in template.text

    def test_modern_server(self):
        """PostgreSQL 11 and later use prokind."""
        template = select_template(QueryFamily.ATTRIBUTES, ObjectType.FUNCTION, 110000)
        assert "pr.prokind IN" in template.text

    def test_legacy_server(self):
        """Older servers filter aggregates out with proisagg."""
        template = select_template(QueryFamily.ATTRIBUTES, ObjectType.FUNCTION, 100012)
        assert "NOT pr.proisagg" in template.text
        assert "prokind" not in template.text

    def test_single_variant_ignores_version(self):
        """Types with one variant return it for any supported server."""
        assert select_template(QueryFamily.LIST, ObjectType.ROLE, 100000) is select_template(
            QueryFamily.LIST, ObjectType.ROLE
        )

    @pytest.mark.parametrize("object_type", [ObjectType.ROLE, ObjectType.COLUMN, ObjectType.FUNCTION])
    def test_server_too_old(self, object_type):
        """Servers before PostgreSQL 10 are rejected instead of sent failing queries."""
        with pytest.raises(UnsupportedServerVersion) as exc_info:
            select_template(QueryFamily.ATTRIBUTES, object_type, 90624)
        assert exc_info.value.server_version == 90624
        assert exc_info.value.min_version == MIN_SERVER_VERSION


class TestBuildQuery:
    """Tests for filter substitution."""

    @pytest.mark.parametrize("object_type", CATALOG_TYPES)
    def test_placeholders_substituted(self, object_type):
        """Built queries hold no substitution points and no stray percent signs."""
        for family in (QueryFamily.LIST, QueryFamily.ATTRIBUTES):
            query = build_query(select_template(family, object_type), FilterSet(oids=("1",), schema="s"))
            assert "{" not in query.sql and "}" not in query.sql
            assert re.sub(r"%\(\w+\)s", "", query.sql).count("%") == 0

    @pytest.mark.parametrize("object_type", CATALOG_TYPES)
    def test_oid_and_name_selected(self, object_type):
        """Every query yields the identifier and name attributes."""
        for family in (QueryFamily.LIST, QueryFamily.ATTRIBUTES):
            sql = build_query(select_template(family, object_type)).sql
            assert " AS oid," in sql
            assert re.search(r" AS name\b", sql)

    def test_no_filters(self):
        """Without filters no parameters are bound."""
        query = build_query(select_template(QueryFamily.LIST, ObjectType.ROLE))
        assert query.params == {}
        assert "LIMIT" not in query.sql

    def test_empty_oid_filter_is_no_filter(self):
        """An empty oid set should not restrict the query."""
        template = select_template(QueryFamily.ATTRIBUTES, ObjectType.DATABASE)
        assert build_query(template, FilterSet(oids=())).sql == build_query(template).sql

    def test_oid_filter(self):
        """Oids are bound as a text array."""
        query = build_query(
            select_template(QueryFamily.ATTRIBUTES, ObjectType.DATABASE),
            FilterSet(oids=("16400", 16401, "16400")),
        )
        assert "(db.oid)::text = ANY(%(oids)s::text[])" in query.sql
        assert query.params == {"oids": ["16400", "16401"]}

    def test_schema_filter(self):
        """Schema-scoped types filter on the namespace name."""
        query = build_query(select_template(QueryFamily.LIST, ObjectType.FUNCTION), FilterSet(schema="public"))
        assert "ns.nspname = %(schema)s" in query.sql
        assert query.params == {"schema": "public"}

    def test_schema_filter_ignored_for_cluster_objects(self):
        """Roles are not schema-scoped; the filter is dropped."""
        query = build_query(select_template(QueryFamily.LIST, ObjectType.ROLE), FilterSet(schema="public"))
        assert "schema" not in query.params
        assert "%(schema)s" not in query.sql

    def test_parent_filter(self):
        """Table-internal objects filter on the owning table."""
        query = build_query(
            select_template(QueryFamily.ATTRIBUTES, ObjectType.COLUMN), FilterSet(parent_oids=("16500",))
        )
        assert "(att.attrelid)::text = ANY(%(parent_oids)s::text[])" in query.sql
        assert query.params["parent_oids"] == ["16500"]

    def test_language_filter(self):
        """Built-in and user-defined languages split functions."""
        template = select_template(QueryFamily.LIST, ObjectType.FUNCTION)
        builtin = build_query(template, FilterSet(builtin_language=True))
        user = build_query(template, FilterSet(builtin_language=False))
        assert "lg.lanname = ANY(%(builtin_languages)s::text[])" in builtin.sql
        assert "lg.lanname <> ALL(%(builtin_languages)s::text[])" in user.sql
        assert builtin.params["builtin_languages"] == ["c", "sql", "internal"]

    def test_exclude_system_by_schema(self):
        """Schema-scoped objects are system objects when they live in a system schema."""
        query = build_query(select_template(QueryFamily.LIST, ObjectType.TABLE), FilterSet(exclude_system=True))
        assert "ns.nspname <> ALL(%(system_schemas)s::text[])" in query.sql
        assert query.params == {"system_schemas": ["pg_catalog", "information_schema", "pg_toast"]}
        assert "16384" not in query.sql

    def test_exclude_system_by_oid(self):
        """Casts have no schema; initdb's oid range marks them as system objects."""
        query = build_query(select_template(QueryFamily.LIST, ObjectType.CAST), FilterSet(exclude_system=True))
        assert "(ca.oid)::oid >= 16384" in query.sql

    @pytest.mark.parametrize(
        "object_type", [ObjectType.ROLE, ObjectType.TABLESPACE, ObjectType.DATABASE, ObjectType.LANGUAGE]
    )
    def test_referenced_system_objects_kept(self, object_type):
        """Bootstrap roles, default tablespaces and built-in languages are referenced by user objects."""
        template = select_template(QueryFamily.LIST, object_type)
        assert build_query(template, FilterSet(exclude_system=True)).sql == build_query(template).sql

    def test_single_result(self):
        """Single-result queries are limited to one row."""
        query = build_query(select_template(QueryFamily.ATTRIBUTES, ObjectType.ROLE), single_result=True)
        assert query.sql.endswith("LIMIT 1")
        assert query.single_result is True

    def test_fragment_family_rejected(self):
        """Auxiliary fragments cannot be run on their own."""
        with pytest.raises(ValueError):
            build_query(select_template(QueryFamily.DEPENDENCY, ObjectType.ROLE))

    def test_attributes_embed_resolution(self):
        """ATTRIBUTES queries resolve references in the same statement."""
        sql = build_query(select_template(QueryFamily.ATTRIBUTES, ObjectType.DATABASE)).sql
        assert "FROM pg_roles AS dep WHERE dep.oid = db.datdba) AS owner" in sql
        assert "db.datdba AS owner_oid" in sql
        assert "FROM pg_tablespace AS dep WHERE dep.oid = db.dattablespace) AS tablespace" in sql
        assert "pg_shdescription" in sql

    def test_list_is_lightweight(self):
        """LIST queries only select the identifier and name."""
        sql = build_query(select_template(QueryFamily.LIST, ObjectType.DATABASE)).sql
        assert "owner" not in sql
        assert "pg_shdescription" not in sql


def select_aliases(text: str) -> list[str]:
    select_list = text.split("SELECT\n    ", 1)[1].split("\nFROM ", 1)[0]
    return [column.rsplit(" AS ", 1)[1] for column in select_list.split(",\n    ")]


ATTRIBUTE_TEMPLATES = [
    template
    for (family, _), variants in sorted(TEMPLATES.items(), key=lambda item: (item[0][0].value, item[0][1].value))
    if family == QueryFamily.ATTRIBUTES
    for template in variants
]


class TestAttributeSelectLists:
    """Tests over the select list of every ATTRIBUTES variant."""

    @pytest.mark.parametrize(
        "template", ATTRIBUTE_TEMPLATES, ids=lambda t: f"{t.object_type.value}-{t.min_version}"
    )
    def test_aliases_unique(self, template):
        """Each attribute name is selected once."""
        aliases = select_aliases(template.text)
        duplicates = sorted({alias for alias in aliases if aliases.count(alias) > 1})
        assert duplicates == []

    @pytest.mark.parametrize(
        "template", ATTRIBUTE_TEMPLATES, ids=lambda t: f"{t.object_type.value}-{t.min_version}"
    )
    def test_oid_and_name_first(self, template):
        assert select_aliases(template.text)[:2] == ["oid", "name"]

    def test_every_variant_covered(self):
        """Both function variants are checked."""
        functions = [t for t in ATTRIBUTE_TEMPLATES if t.object_type == ObjectType.FUNCTION]
        assert len(functions) == 2

    def test_function_result_and_language(self):
        """The resolved language and the result signature are separate attributes."""
        aliases = select_aliases(select_template(QueryFamily.ATTRIBUTES, ObjectType.FUNCTION).text)
        assert aliases.count("language") == 1
        assert aliases.count("return_type") == 1
        assert "result_signature" in aliases

    def test_extension_membership_matches_catalog(self):
        """Extension members are matched on catalog as well as oid."""
        text = select_template(QueryFamily.EXTENSION_MEMBERSHIP, ObjectType.FUNCTION).text
        assert "ext.classid = 'pg_proc'::regclass" in text
        sql = select_template(QueryFamily.ATTRIBUTES, ObjectType.TYPE).text
        assert "ext.classid = 'pg_type'::regclass AND ext.objid = tp.oid" in sql
