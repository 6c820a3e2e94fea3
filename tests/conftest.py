"""Pytest configuration and shared fixtures."""

import textwrap
import pytest
from pathlib import Path
from cfinventory.config import Config


USER_SERVICE_CFC = textwrap.dedent(
    """\
    <cfcomponent extends="BaseService" implements="IUserService">
        <cffunction name="getUser" access="public" returntype="query">
            <cfargument name="id" type="numeric" required="true">
            <cfquery name="qUser" datasource="main">
                SELECT * FROM dbo.users
                WHERE id = <cfqueryparam value="#arguments.id#" cfsqltype="cf_sql_integer">
            </cfquery>
            <cfreturn qUser>
        </cffunction>

        <cffunction name="listUsers" access="remote" returntype="query">
            <cfreturn getUser(1)>
        </cffunction>
    </cfcomponent>
    """
)

INDEX_CFM = textwrap.dedent(
    """\
    <cfinclude template="header.cfm">
    <cfset svc = createObject("component", "UserService")>
    <cfinvoke component="UserService" method="getUser" returnvariable="u" id="1"/>
    <cfmodule template="tags/nav.cfm" name="nav" active="home">
    <cfoutput>#svc.getUser(5)#</cfoutput>
    """
)


@pytest.fixture
def config() -> Config:
    """Provide a test configuration."""
    return Config(max_workers=2)


@pytest.fixture
def sample_app(tmp_path: Path) -> Path:
    """Create a small template application tree."""
    app = tmp_path / "legacy_app"
    (app / "components").mkdir(parents=True)
    (app / "images").mkdir()
    (app / "cache").mkdir()

    (app / "Application.cfc").write_text('<cfcomponent output="false">\n</cfcomponent>\n')
    (app / "header.cfm").write_text("<cfoutput>Header</cfoutput>\n")
    (app / "index.cfm").write_text(INDEX_CFM)
    (app / "notes.txt").write_text("remember to call getUser( later\n")
    (app / "components" / "UserService.cfc").write_text(USER_SERVICE_CFC)
    (app / "images" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (app / "cache" / "stale.cfm").write_text('<cffunction name="staleFn">\n')

    return app
