"""System catalog SQL for every supported object type.

Each CatalogObject describes where one kind of object lives in pg_catalog.
The template registry turns these into LIST and ATTRIBUTES queries, so the
SQL here must not contain literal braces or percent signs: the first would
clash with the filter substitution points, the second with bound parameters.
"""

from dataclasses import dataclass
from typing import Optional

from .object_types import ObjectType

# First oid handed out to user-created objects (FirstNormalObjectId)
FIRST_NORMAL_OBJECT_ID = 16384

# Oldest server the catalog queries are written for (PostgreSQL 10)
MIN_SERVER_VERSION = 100000


@dataclass(frozen=True)
class Dependency:
    """A reference from one catalog object to another, held as an oid."""

    attribute: str
    oid_field: str
    object_type: ObjectType


@dataclass(frozen=True)
class CatalogObject:
    """Where and how an object type is stored in the system catalog."""

    object_type: ObjectType
    catalog: str
    from_clause: str
    oid_column: str
    name_column: str
    columns: tuple[str, ...] = ()
    dependencies: tuple[Dependency, ...] = ()
    where: str = "TRUE"
    order_by: Optional[str] = None
    schema_column: Optional[str] = None
    parent_column: Optional[str] = None
    language_column: Optional[str] = None
    # Referenced by user objects; read even when system objects are excluded
    keep_system: bool = False
    # Set to False when the oid column is not a real catalog oid
    has_comment: bool = True
    extension_member: bool = True
    min_version: int = 0


def _owner(oid_field: str) -> Dependency:
    return Dependency("owner", oid_field, ObjectType.ROLE)


def _schema(oid_field: str) -> Dependency:
    return Dependency("schema", oid_field, ObjectType.SCHEMA)


# Lookups that resolve a referenced oid into a readable name. "dep" is
# reserved as the inner alias; outer queries never use it.
DEPENDENCY_QUERIES: dict[ObjectType, str] = {
    ObjectType.ROLE: "SELECT dep.rolname FROM pg_roles AS dep WHERE dep.oid = {oid_field}",
    ObjectType.TABLESPACE: "SELECT dep.spcname FROM pg_tablespace AS dep WHERE dep.oid = {oid_field}",
    ObjectType.DATABASE: "SELECT dep.datname FROM pg_database AS dep WHERE dep.oid = {oid_field}",
    ObjectType.SCHEMA: "SELECT dep.nspname FROM pg_namespace AS dep WHERE dep.oid = {oid_field}",
    ObjectType.LANGUAGE: "SELECT dep.lanname FROM pg_language AS dep WHERE dep.oid = {oid_field}",
    ObjectType.FUNCTION: (
        "SELECT dep.oid::regprocedure::text FROM pg_proc AS dep WHERE dep.oid = {oid_field}"
    ),
    ObjectType.TYPE: "SELECT format_type(dep.oid, NULL) FROM pg_type AS dep WHERE dep.oid = {oid_field}",
    ObjectType.OPERATOR: (
        "SELECT dep.oid::regoperator::text FROM pg_operator AS dep WHERE dep.oid = {oid_field}"
    ),
    ObjectType.OPFAMILY: "SELECT dep.opfname FROM pg_opfamily AS dep WHERE dep.oid = {oid_field}",
    ObjectType.COLLATION: "SELECT dep.collname FROM pg_collation AS dep WHERE dep.oid = {oid_field}",
    ObjectType.TABLE: "SELECT dep.oid::regclass::text FROM pg_class AS dep WHERE dep.oid = {oid_field}",
}

COMMENT_QUERY = (
    "SELECT dsc.description FROM pg_description AS dsc "
    "WHERE dsc.objoid = {oid_field} AND dsc.objsubid = 0"
)

SHARED_COMMENT_QUERY = (
    "SELECT dsc.description FROM pg_shdescription AS dsc WHERE dsc.objoid = {oid_field}"
)

EXTENSION_MEMBERSHIP_QUERY = (
    "SELECT EXISTS (SELECT 1 FROM pg_depend AS ext "
    "WHERE ext.objid = {oid_field} AND ext.deptype = 'e')"
)

# Oids are unique per catalog only, so members are matched on both
CATALOG_EXTENSION_MEMBERSHIP_QUERY = (
    "SELECT EXISTS (SELECT 1 FROM pg_depend AS ext "
    "WHERE ext.classid = '{catalog}'::regclass AND ext.objid = {oid_field} AND ext.deptype = 'e')"
)


ROLE = CatalogObject(
    object_type=ObjectType.ROLE,
    catalog="pg_authid",
    from_clause="pg_roles AS rl",
    oid_column="rl.oid",
    name_column="rl.rolname",
    columns=(
        "rl.rolsuper AS superuser_bool",
        "rl.rolinherit AS inherit_bool",
        "rl.rolcreaterole AS createrole_bool",
        "rl.rolcreatedb AS createdb_bool",
        "rl.rolcanlogin AS login_bool",
        "rl.rolreplication AS replication_bool",
        "rl.rolbypassrls AS bypassrls_bool",
        "rl.rolconnlimit AS conn_limit",
        "rl.rolvaliduntil AS validity",
        "rl.rolpassword AS password",
        "rl.rolconfig AS config",
        "ARRAY(SELECT am.member FROM pg_auth_members AS am"
        " WHERE am.roleid = rl.oid AND NOT am.admin_option) AS member_roles",
        "ARRAY(SELECT am.member FROM pg_auth_members AS am"
        " WHERE am.roleid = rl.oid AND am.admin_option) AS admin_roles",
    ),
    extension_member=False,
    keep_system=True,
)

TABLESPACE = CatalogObject(
    object_type=ObjectType.TABLESPACE,
    catalog="pg_tablespace",
    from_clause="pg_tablespace AS spc",
    oid_column="spc.oid",
    name_column="spc.spcname",
    columns=(
        "pg_tablespace_location(spc.oid) AS directory",
        "spc.spcoptions AS options",
        "spc.spcacl AS permission",
    ),
    dependencies=(_owner("spc.spcowner"),),
    extension_member=False,
    keep_system=True,
)

DATABASE = CatalogObject(
    object_type=ObjectType.DATABASE,
    catalog="pg_database",
    from_clause="pg_database AS db",
    oid_column="db.oid",
    name_column="db.datname",
    columns=(
        "pg_encoding_to_char(db.encoding) AS encoding",
        "db.datcollate AS lc_collate",
        "db.datctype AS lc_ctype",
        "db.datconnlimit AS conn_limit",
        "db.datistemplate AS is_template_bool",
        "db.datallowconn AS allow_conns_bool",
        "db.datacl AS permission",
    ),
    dependencies=(
        _owner("db.datdba"),
        Dependency("tablespace", "db.dattablespace", ObjectType.TABLESPACE),
    ),
    extension_member=False,
    keep_system=True,
)

SCHEMA = CatalogObject(
    object_type=ObjectType.SCHEMA,
    catalog="pg_namespace",
    from_clause="pg_namespace AS ns",
    oid_column="ns.oid",
    name_column="ns.nspname",
    columns=("ns.nspacl AS permission",),
    dependencies=(_owner("ns.nspowner"),),
    where="ns.nspname !~ '^pg_(toast|temp_|toast_temp_)'",
    schema_column="ns.nspname",
)

EXTENSION = CatalogObject(
    object_type=ObjectType.EXTENSION,
    catalog="pg_extension",
    from_clause="pg_extension AS ex JOIN pg_namespace AS ns ON ns.oid = ex.extnamespace",
    oid_column="ex.oid",
    name_column="ex.extname",
    columns=(
        "ex.extversion AS cur_version",
        "ex.extrelocatable AS relocatable_bool",
    ),
    dependencies=(_owner("ex.extowner"), _schema("ex.extnamespace")),
    schema_column="ns.nspname",
    extension_member=False,
)

_FUNCTION_FROM = (
    "pg_proc AS pr"
    " JOIN pg_namespace AS ns ON ns.oid = pr.pronamespace"
    " JOIN pg_language AS lg ON lg.oid = pr.prolang"
)

_FUNCTION_COLUMNS = (
    "pr.oid::regprocedure::text AS signature",
    "pr.prosecdef AS security_definer_bool",
    "pr.proleakproof AS leakproof_bool",
    "pr.proisstrict AS strict_bool",
    "pr.proretset AS returns_setof_bool",
    "CASE pr.provolatile WHEN 'i' THEN 'IMMUTABLE' WHEN 's' THEN 'STABLE'"
    " ELSE 'VOLATILE' END AS behavior_type",
    "pr.procost AS execution_cost",
    "pr.prorows AS row_amount",
    "pr.proargtypes::oid[] AS arg_types",
    "pr.proargnames AS arg_names",
    "pr.proargmodes AS arg_modes",
    "pg_get_function_arguments(pr.oid) AS arguments",
    "pg_get_function_result(pr.oid) AS result_signature",
    "pr.prosrc AS definition",
    "pr.probin AS library",
    "pr.proconfig AS config",
    "pr.proacl AS permission",
)

_FUNCTION_DEPENDENCIES = (
    _owner("pr.proowner"),
    _schema("pr.pronamespace"),
    Dependency("language", "pr.prolang", ObjectType.LANGUAGE),
    Dependency("return_type", "pr.prorettype", ObjectType.TYPE),
)

FUNCTION = CatalogObject(
    object_type=ObjectType.FUNCTION,
    catalog="pg_proc",
    from_clause=_FUNCTION_FROM,
    oid_column="pr.oid",
    name_column="pr.proname",
    columns=_FUNCTION_COLUMNS + (
        "pr.prokind = 'w' AS window_func_bool",
        "pr.prokind = 'p' AS procedure_bool",
    ),
    dependencies=_FUNCTION_DEPENDENCIES,
    where="pr.prokind IN ('f', 'w', 'p')",
    order_by="pr.proname, pr.oid",
    schema_column="ns.nspname",
    language_column="lg.lanname",
    min_version=110000,
)

# Servers before 11 flag aggregates and window functions with booleans
LEGACY_FUNCTION = CatalogObject(
    object_type=ObjectType.FUNCTION,
    catalog="pg_proc",
    from_clause=_FUNCTION_FROM,
    oid_column="pr.oid",
    name_column="pr.proname",
    columns=_FUNCTION_COLUMNS + (
        "pr.proiswindow AS window_func_bool",
        "FALSE AS procedure_bool",
    ),
    dependencies=_FUNCTION_DEPENDENCIES,
    where="NOT pr.proisagg",
    order_by="pr.proname, pr.oid",
    schema_column="ns.nspname",
    language_column="lg.lanname",
)

TYPE = CatalogObject(
    object_type=ObjectType.TYPE,
    catalog="pg_type",
    from_clause="pg_type AS tp JOIN pg_namespace AS ns ON ns.oid = tp.typnamespace",
    oid_column="tp.oid",
    name_column="tp.typname",
    columns=(
        "CASE tp.typtype WHEN 'b' THEN 'base' WHEN 'c' THEN 'composite' WHEN 'd' THEN 'domain'"
        " WHEN 'e' THEN 'enumeration' WHEN 'r' THEN 'range' END AS configuration",
        "tp.typlen AS internal_length",
        "tp.typbyval AS by_value_bool",
        "tp.typalign AS alignment",
        "tp.typstorage AS storage",
        "tp.typcategory AS category",
        "tp.typispreferred AS preferred_bool",
        "tp.typdelim AS delimiter",
        "tp.typdefault AS default_value",
        "tp.typnotnull AS not_null_bool",
        "ARRAY(SELECT en.enumlabel FROM pg_enum AS en"
        " WHERE en.enumtypid = tp.oid ORDER BY en.enumsortorder) AS enumerations",
        "(SELECT string_agg(pg_get_constraintdef(cs.oid), ' AND ') FROM pg_constraint AS cs"
        " WHERE cs.contypid = tp.oid) AS constraints",
        "(SELECT string_agg(ta.attname || ' ' || format_type(ta.atttypid, ta.atttypmod), ','"
        " ORDER BY ta.attnum) FROM pg_attribute AS ta WHERE ta.attrelid = tp.typrelid"
        " AND ta.attnum > 0 AND NOT ta.attisdropped) AS type_attributes",
        "tp.typacl AS permission",
    ),
    dependencies=(
        _owner("tp.typowner"),
        _schema("tp.typnamespace"),
        Dependency("collation", "tp.typcollation", ObjectType.COLLATION),
        Dependency("base_type", "tp.typbasetype", ObjectType.TYPE),
        Dependency("subtype", "(SELECT rg.rngsubtype FROM pg_range AS rg WHERE rg.rngtypid = tp.oid)",
                   ObjectType.TYPE),
        Dependency("input", "tp.typinput::oid", ObjectType.FUNCTION),
        Dependency("output", "tp.typoutput::oid", ObjectType.FUNCTION),
        Dependency("receive", "tp.typreceive::oid", ObjectType.FUNCTION),
        Dependency("send", "tp.typsend::oid", ObjectType.FUNCTION),
    ),
    where=(
        "tp.typtype IN ('b', 'c', 'd', 'e', 'r')"
        " AND tp.typcategory <> 'A'"
        " AND (tp.typrelid = 0 OR"
        " (SELECT cl.relkind FROM pg_class AS cl WHERE cl.oid = tp.typrelid) = 'c')"
    ),
    schema_column="ns.nspname",
)

LANGUAGE = CatalogObject(
    object_type=ObjectType.LANGUAGE,
    catalog="pg_language",
    from_clause="pg_language AS lg",
    oid_column="lg.oid",
    name_column="lg.lanname",
    columns=(
        "lg.lanpltrusted AS trusted_bool",
        "lg.lanacl AS permission",
    ),
    dependencies=(
        _owner("lg.lanowner"),
        Dependency("handler", "lg.lanplcallfoid", ObjectType.FUNCTION),
        Dependency("inline", "lg.laninline", ObjectType.FUNCTION),
        Dependency("validator", "lg.lanvalidator", ObjectType.FUNCTION),
    ),
    language_column="lg.lanname",
    keep_system=True,
)

AGGREGATE = CatalogObject(
    object_type=ObjectType.AGGREGATE,
    catalog="pg_proc",
    from_clause=(
        "pg_aggregate AS ag"
        " JOIN pg_proc AS pr ON pr.oid = ag.aggfnoid"
        " JOIN pg_namespace AS ns ON ns.oid = pr.pronamespace"
    ),
    oid_column="pr.oid",
    name_column="pr.proname",
    columns=(
        "pr.oid::regprocedure::text AS signature",
        "pr.proargtypes::oid[] AS types",
        "ag.aggkind AS kind",
        "ag.agginitval AS initial_condition",
        "pr.proacl AS permission",
    ),
    dependencies=(
        _owner("pr.proowner"),
        _schema("pr.pronamespace"),
        Dependency("transition", "ag.aggtransfn::oid", ObjectType.FUNCTION),
        Dependency("final", "ag.aggfinalfn::oid", ObjectType.FUNCTION),
        Dependency("sort_op", "ag.aggsortop", ObjectType.OPERATOR),
        Dependency("state_type", "ag.aggtranstype", ObjectType.TYPE),
    ),
    order_by="pr.proname, pr.oid",
    schema_column="ns.nspname",
)

OPERATOR = CatalogObject(
    object_type=ObjectType.OPERATOR,
    catalog="pg_operator",
    from_clause="pg_operator AS op JOIN pg_namespace AS ns ON ns.oid = op.oprnamespace",
    oid_column="op.oid",
    name_column="op.oprname",
    columns=(
        "op.oid::regoperator::text AS signature",
        "op.oprkind AS kind",
        "op.oprcanhash AS hashes_bool",
        "op.oprcanmerge AS merges_bool",
    ),
    dependencies=(
        _owner("op.oprowner"),
        _schema("op.oprnamespace"),
        Dependency("left_type", "op.oprleft", ObjectType.TYPE),
        Dependency("right_type", "op.oprright", ObjectType.TYPE),
        Dependency("result_type", "op.oprresult", ObjectType.TYPE),
        Dependency("commutator", "op.oprcom", ObjectType.OPERATOR),
        Dependency("negator", "op.oprnegate", ObjectType.OPERATOR),
        Dependency("operator_func", "op.oprcode::oid", ObjectType.FUNCTION),
        Dependency("restrict", "op.oprrest::oid", ObjectType.FUNCTION),
        Dependency("join", "op.oprjoin::oid", ObjectType.FUNCTION),
    ),
    order_by="op.oprname, op.oid",
    schema_column="ns.nspname",
)

OPFAMILY = CatalogObject(
    object_type=ObjectType.OPFAMILY,
    catalog="pg_opfamily",
    from_clause=(
        "pg_opfamily AS opf"
        " JOIN pg_namespace AS ns ON ns.oid = opf.opfnamespace"
        " JOIN pg_am AS am ON am.oid = opf.opfmethod"
    ),
    oid_column="opf.oid",
    name_column="opf.opfname",
    columns=("am.amname AS index_type",),
    dependencies=(_owner("opf.opfowner"), _schema("opf.opfnamespace")),
    order_by="opf.opfname, opf.oid",
    schema_column="ns.nspname",
)

OPCLASS = CatalogObject(
    object_type=ObjectType.OPCLASS,
    catalog="pg_opclass",
    from_clause=(
        "pg_opclass AS opc"
        " JOIN pg_namespace AS ns ON ns.oid = opc.opcnamespace"
        " JOIN pg_am AS am ON am.oid = opc.opcmethod"
    ),
    oid_column="opc.oid",
    name_column="opc.opcname",
    columns=(
        "am.amname AS index_type",
        "opc.opcdefault AS default_bool",
    ),
    dependencies=(
        _owner("opc.opcowner"),
        _schema("opc.opcnamespace"),
        Dependency("family", "opc.opcfamily", ObjectType.OPFAMILY),
        Dependency("type", "opc.opcintype", ObjectType.TYPE),
        Dependency("storage", "opc.opckeytype", ObjectType.TYPE),
    ),
    order_by="opc.opcname, opc.oid",
    schema_column="ns.nspname",
)

COLLATION = CatalogObject(
    object_type=ObjectType.COLLATION,
    catalog="pg_collation",
    from_clause="pg_collation AS cl JOIN pg_namespace AS ns ON ns.oid = cl.collnamespace",
    oid_column="cl.oid",
    name_column="cl.collname",
    columns=(
        "CASE WHEN cl.collencoding < 0 THEN NULL"
        " ELSE pg_encoding_to_char(cl.collencoding) END AS encoding",
        "cl.collcollate AS lc_collate",
        "cl.collctype AS lc_ctype",
        "cl.collprovider AS provider",
    ),
    dependencies=(_owner("cl.collowner"), _schema("cl.collnamespace")),
    order_by="cl.collname, cl.oid",
    schema_column="ns.nspname",
)

CONVERSION = CatalogObject(
    object_type=ObjectType.CONVERSION,
    catalog="pg_conversion",
    from_clause="pg_conversion AS cv JOIN pg_namespace AS ns ON ns.oid = cv.connamespace",
    oid_column="cv.oid",
    name_column="cv.conname",
    columns=(
        "pg_encoding_to_char(cv.conforencoding) AS src_encoding",
        "pg_encoding_to_char(cv.contoencoding) AS dst_encoding",
        "cv.condefault AS default_bool",
    ),
    dependencies=(
        _owner("cv.conowner"),
        _schema("cv.connamespace"),
        Dependency("function", "cv.conproc::oid", ObjectType.FUNCTION),
    ),
    schema_column="ns.nspname",
)

TABLE = CatalogObject(
    object_type=ObjectType.TABLE,
    catalog="pg_class",
    from_clause="pg_class AS tb JOIN pg_namespace AS ns ON ns.oid = tb.relnamespace",
    oid_column="tb.oid",
    name_column="tb.relname",
    columns=(
        "tb.relkind = 'p' AS partitioned_bool",
        "tb.relpersistence = 'u' AS unlogged_bool",
        "tb.relrowsecurity AS rls_enabled_bool",
        "tb.relforcerowsecurity AS rls_forced_bool",
        "tb.reloptions AS options",
        "tb.relacl AS permission",
    ),
    dependencies=(
        _owner("tb.relowner"),
        _schema("tb.relnamespace"),
        Dependency("tablespace", "tb.reltablespace", ObjectType.TABLESPACE),
    ),
    where="tb.relkind IN ('r', 'p')",
    schema_column="ns.nspname",
)

COLUMN = CatalogObject(
    object_type=ObjectType.COLUMN,
    catalog="pg_attribute",
    from_clause=(
        "pg_attribute AS att"
        " JOIN pg_class AS tb ON tb.oid = att.attrelid"
        " JOIN pg_namespace AS ns ON ns.oid = tb.relnamespace"
        " LEFT JOIN pg_attrdef AS df ON df.adrelid = att.attrelid AND df.adnum = att.attnum"
    ),
    oid_column="att.attrelid::text || ':' || att.attnum::text",
    name_column="att.attname",
    columns=(
        "att.attnum AS position",
        "format_type(att.atttypid, att.atttypmod) AS type_name",
        "att.attnotnull AS not_null_bool",
        "pg_get_expr(df.adbin, df.adrelid) AS default_value",
        "att.attidentity AS identity_type",
        "att.attacl AS permission",
        "col_description(att.attrelid, att.attnum) AS comment",
    ),
    dependencies=(
        Dependency("table", "att.attrelid", ObjectType.TABLE),
        _schema("tb.relnamespace"),
        Dependency("type", "att.atttypid", ObjectType.TYPE),
        Dependency("collation", "att.attcollation", ObjectType.COLLATION),
    ),
    where="att.attnum > 0 AND NOT att.attisdropped AND tb.relkind IN ('r', 'p')",
    order_by="att.attrelid, att.attnum",
    schema_column="ns.nspname",
    parent_column="att.attrelid",
    has_comment=False,
    extension_member=False,
)

INDEX = CatalogObject(
    object_type=ObjectType.INDEX,
    catalog="pg_class",
    from_clause=(
        "pg_index AS ix"
        " JOIN pg_class AS id ON id.oid = ix.indexrelid"
        " JOIN pg_class AS tb ON tb.oid = ix.indrelid"
        " JOIN pg_namespace AS ns ON ns.oid = id.relnamespace"
        " JOIN pg_am AS am ON am.oid = id.relam"
    ),
    oid_column="ix.indexrelid",
    name_column="id.relname",
    columns=(
        "am.amname AS index_type",
        "ix.indisunique AS unique_bool",
        "ix.indkey::int2[] AS columns",
        "pg_get_indexdef(ix.indexrelid) AS definition",
        "pg_get_expr(ix.indpred, ix.indrelid) AS condition",
        "id.reloptions AS options",
    ),
    dependencies=(
        Dependency("table", "ix.indrelid", ObjectType.TABLE),
        _schema("id.relnamespace"),
        Dependency("tablespace", "id.reltablespace", ObjectType.TABLESPACE),
    ),
    # Indexes backing constraints are imported with the constraint
    where=(
        "tb.relkind IN ('r', 'p') AND NOT EXISTS (SELECT 1 FROM pg_constraint AS cs"
        " WHERE cs.conindid = ix.indexrelid AND cs.contype IN ('p', 'u', 'x'))"
    ),
    schema_column="ns.nspname",
    parent_column="ix.indrelid",
)

RULE = CatalogObject(
    object_type=ObjectType.RULE,
    catalog="pg_rewrite",
    from_clause=(
        "pg_rewrite AS rw"
        " JOIN pg_class AS tb ON tb.oid = rw.ev_class"
        " JOIN pg_namespace AS ns ON ns.oid = tb.relnamespace"
    ),
    oid_column="rw.oid",
    name_column="rw.rulename",
    columns=(
        "CASE rw.ev_type WHEN '1' THEN 'SELECT' WHEN '2' THEN 'UPDATE' WHEN '3' THEN 'INSERT'"
        " WHEN '4' THEN 'DELETE' END AS event_type",
        "rw.is_instead AS instead_bool",
        "pg_get_ruledef(rw.oid) AS definition",
    ),
    dependencies=(
        Dependency("table", "rw.ev_class", ObjectType.TABLE),
        _schema("tb.relnamespace"),
    ),
    where="rw.rulename <> '_RETURN'",
    schema_column="ns.nspname",
    parent_column="rw.ev_class",
)

TRIGGER = CatalogObject(
    object_type=ObjectType.TRIGGER,
    catalog="pg_trigger",
    from_clause=(
        "pg_trigger AS tg"
        " JOIN pg_class AS tb ON tb.oid = tg.tgrelid"
        " JOIN pg_namespace AS ns ON ns.oid = tb.relnamespace"
    ),
    oid_column="tg.oid",
    name_column="tg.tgname",
    columns=(
        "(tg.tgtype & 1) = 1 AS per_row_bool",
        "(tg.tgtype & 2) = 2 AS before_bool",
        "(tg.tgtype & 64) = 64 AS instead_of_bool",
        "(tg.tgtype & 4) = 4 AS insert_event_bool",
        "(tg.tgtype & 8) = 8 AS delete_event_bool",
        "(tg.tgtype & 16) = 16 AS update_event_bool",
        "(tg.tgtype & 32) = 32 AS truncate_event_bool",
        "tg.tgenabled <> 'D' AS enabled_bool",
        "tg.tgdeferrable AS deferrable_bool",
        "tg.tginitdeferred AS init_deferred_bool",
        "tg.tgnargs AS arg_count",
        "pg_get_triggerdef(tg.oid) AS definition",
    ),
    dependencies=(
        Dependency("table", "tg.tgrelid", ObjectType.TABLE),
        _schema("tb.relnamespace"),
        Dependency("trigger_func", "tg.tgfoid", ObjectType.FUNCTION),
        Dependency("ref_table", "tg.tgconstrrelid", ObjectType.TABLE),
    ),
    where="NOT tg.tgisinternal",
    schema_column="ns.nspname",
    parent_column="tg.tgrelid",
)

CONSTRAINT = CatalogObject(
    object_type=ObjectType.CONSTRAINT,
    catalog="pg_constraint",
    from_clause=(
        "pg_constraint AS cs"
        " JOIN pg_class AS tb ON tb.oid = cs.conrelid"
        " JOIN pg_namespace AS ns ON ns.oid = tb.relnamespace"
    ),
    oid_column="cs.oid",
    name_column="cs.conname",
    columns=(
        "CASE cs.contype WHEN 'p' THEN 'primary-key' WHEN 'u' THEN 'unique' WHEN 'f' THEN 'foreign-key'"
        " WHEN 'c' THEN 'check' WHEN 'x' THEN 'exclude' END AS type",
        "pg_get_constraintdef(cs.oid) AS definition",
        "cs.condeferrable AS deferrable_bool",
        "cs.condeferred AS deferred_bool",
        "cs.convalidated AS validated_bool",
        "cs.connoinherit AS no_inherit_bool",
        "cs.conkey AS src_columns",
        "cs.confkey AS dst_columns",
        "cs.confupdtype AS upd_action",
        "cs.confdeltype AS del_action",
        "cs.confmatchtype AS comparison_type",
    ),
    dependencies=(
        Dependency("table", "cs.conrelid", ObjectType.TABLE),
        _schema("tb.relnamespace"),
        Dependency("ref_table", "cs.confrelid", ObjectType.TABLE),
        Dependency("tablespace", "(SELECT ic.reltablespace FROM pg_class AS ic WHERE ic.oid = cs.conindid)",
                   ObjectType.TABLESPACE),
    ),
    where="cs.contype IN ('p', 'u', 'f', 'c', 'x')",
    schema_column="ns.nspname",
    parent_column="cs.conrelid",
)

CAST = CatalogObject(
    object_type=ObjectType.CAST,
    catalog="pg_cast",
    from_clause="pg_cast AS ca",
    oid_column="ca.oid",
    name_column=(
        "'cast(' || format_type(ca.castsource, NULL) || ','"
        " || format_type(ca.casttarget, NULL) || ')'"
    ),
    columns=(
        "CASE ca.castcontext WHEN 'e' THEN 'EXPLICIT' WHEN 'a' THEN 'ASSIGNMENT'"
        " WHEN 'i' THEN 'IMPLICIT' END AS cast_type",
        "ca.castmethod = 'i' AS io_cast_bool",
    ),
    dependencies=(
        Dependency("source_type", "ca.castsource", ObjectType.TYPE),
        Dependency("dest_type", "ca.casttarget", ObjectType.TYPE),
        Dependency("function", "ca.castfunc", ObjectType.FUNCTION),
    ),
    order_by="name",
)

INHERITANCE = CatalogObject(
    object_type=ObjectType.INHERITANCE,
    catalog="pg_inherits",
    from_clause=(
        "pg_inherits AS ih"
        " JOIN pg_class AS tb ON tb.oid = ih.inhrelid"
        " JOIN pg_namespace AS ns ON ns.oid = tb.relnamespace"
    ),
    oid_column="ih.inhrelid::text || ':' || ih.inhseqno::text",
    name_column="tb.relname",
    columns=("ih.inhseqno AS position",),
    dependencies=(
        Dependency("table", "ih.inhrelid", ObjectType.TABLE),
        _schema("tb.relnamespace"),
        Dependency("parent_table", "ih.inhparent", ObjectType.TABLE),
    ),
    where="tb.relkind IN ('r', 'p')",
    order_by="tb.relname, ih.inhseqno",
    schema_column="ns.nspname",
    parent_column="ih.inhrelid",
    has_comment=False,
    extension_member=False,
)

VIEW = CatalogObject(
    object_type=ObjectType.VIEW,
    catalog="pg_class",
    from_clause="pg_class AS vw JOIN pg_namespace AS ns ON ns.oid = vw.relnamespace",
    oid_column="vw.oid",
    name_column="vw.relname",
    columns=(
        "vw.relkind = 'm' AS materialized_bool",
        "pg_get_viewdef(vw.oid) AS definition",
        "vw.reloptions AS options",
        "vw.relacl AS permission",
    ),
    dependencies=(
        _owner("vw.relowner"),
        _schema("vw.relnamespace"),
        Dependency("tablespace", "vw.reltablespace", ObjectType.TABLESPACE),
    ),
    where="vw.relkind IN ('v', 'm')",
    schema_column="ns.nspname",
)

# PERMISSION has no catalog of its own; ACLs are reported on their owners.
CATALOG_OBJECTS: tuple[CatalogObject, ...] = (
    ROLE,
    TABLESPACE,
    DATABASE,
    SCHEMA,
    EXTENSION,
    FUNCTION,
    LEGACY_FUNCTION,
    TYPE,
    LANGUAGE,
    AGGREGATE,
    OPERATOR,
    OPFAMILY,
    OPCLASS,
    COLLATION,
    CONVERSION,
    TABLE,
    COLUMN,
    INDEX,
    RULE,
    TRIGGER,
    CONSTRAINT,
    CAST,
    INHERITANCE,
    VIEW,
)
