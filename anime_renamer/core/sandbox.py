"""Lua sandbox used to run renamer scripts.

One LuaRuntime is created per process. Scripts never see its globals: each
run gets a fresh environment table holding an allow-listed subset of the
standard library, the query helpers, the shared read-only enum tables and
the per-file bindings.

The runtime is not thread-safe; callers must not run two scripts at once.
"""

import logging
from importlib import resources
from typing import Any, Dict, Optional, Tuple

import lupa

from .errors import ScriptError
from ..models.types import ANIME_TYPES, TITLE_TYPES, LANGUAGES, EPISODE_TYPES, IMPORT_FOLDER_TYPES

logger = logging.getLogger(__name__)

# Read-only enum tables, exposed to scripts under these global names
ENUM_TABLES = {
    "AnimeType": ANIME_TYPES,
    "TitleType": TITLE_TYPES,
    "Language": LANGUAGES,
    "EpisodeType": EPISODE_TYPES,
    "ImportFolderType": IMPORT_FOLDER_TYPES,
}

BASE_ENV = """
ipairs = ipairs, next = next, pairs = pairs, pcall = pcall, error = error, assert = assert,
tonumber = tonumber, tostring = tostring, type = type, select = select,
setmetatable = setmetatable, getmetatable = getmetatable,
rawequal = rawequal, rawget = rawget, rawlen = rawlen,
string = { byte = string.byte, char = string.char, find = string.find,
  format = string.format, gmatch = string.gmatch, gsub = string.gsub,
  len = string.len, lower = string.lower, match = string.match,
  rep = string.rep, reverse = string.reverse, sub = string.sub,
  upper = string.upper, pack = string.pack, unpack = string.unpack, packsize = string.packsize },
table = { concat = table.concat, insert = table.insert, move = table.move, pack = table.pack,
  remove = table.remove, sort = table.sort, unpack = table.unpack },
math = { abs = math.abs, acos = math.acos, asin = math.asin, atan = math.atan, ceil = math.ceil,
  cos = math.cos, deg = math.deg, exp = math.exp, floor = math.floor, fmod = math.fmod,
  huge = math.huge, log = math.log, max = math.max, maxinteger = math.maxinteger,
  min = math.min, mininteger = math.mininteger, modf = math.modf, pi = math.pi,
  rad = math.rad, random = math.random, randomseed = math.randomseed, sin = math.sin,
  sqrt = math.sqrt, tan = math.tan, tointeger = math.tointeger, type = math.type, ult = math.ult },
os = { clock = os.clock, difftime = os.difftime, time = os.time, date = os.date },
utf8 = { char = utf8.char, charpattern = utf8.charpattern, codepoint = utf8.codepoint,
  codes = utf8.codes, len = utf8.len, offset = utf8.offset },
from = from, fromArray = fromArray, fromDictionary = fromDictionary, fromIterator = fromIterator,
fromSet = fromSet, fromNothing = fromNothing,
"""

SANDBOX_FUNCTION = """
return function (untrusted_code, env)
  local untrusted_function, message = load(untrusted_code, "=script", "t", env)
  if not untrusted_function then return nil, message end
  return untrusted_function()
end
"""

READONLY_FUNCTION = """
return function (t)
  local proxy = {}
  local mt = {
    __index = t,
    __newindex = function (t, k, v)
      error("attempt to update a read-only table", 2)
    end,
    __len = function () return #t end,
    __pairs = function (p)
      return function (_, k) return next(t, k) end, p, nil
    end,
    __metatable = false,
  }
  setmetatable(proxy, mt)
  return proxy
end
"""


WRAP_FUNCTION = """
return function (f)
  return function (...) return f(...) end
end
"""

LOCK_METATABLE_FUNCTION = """
return function (o) getmetatable(o).__metatable = false end
"""


def _deny_attribute(obj, attr_name, is_setting):
    raise AttributeError(f"access to '{attr_name}' is not allowed from scripts")


class LuaSandbox:
    """Long-lived Lua runtime with a restricted per-run environment."""

    def __init__(self) -> None:
        self.runtime = lupa.LuaRuntime(
            unpack_returned_tuples=True,
            register_eval=False,
            register_builtins=False,
            attribute_filter=_deny_attribute,
        )
        g = self.runtime.globals()
        # string methods resolve through this metatable; hide it from scripts
        self.runtime.execute('getmetatable("").__metatable = false')
        self.runtime.execute(resources.files("anime_renamer").joinpath("lua/query.lua").read_text(encoding="utf-8"))
        self._run_sandboxed = self.runtime.execute(SANDBOX_FUNCTION)
        readonly = self.runtime.execute(READONLY_FUNCTION)
        self._wrap = self.runtime.execute(WRAP_FUNCTION)
        # shared by every Python object handed to Lua
        self.runtime.execute(LOCK_METATABLE_FUNCTION)(_deny_attribute)

        names = []
        for name, members in ENUM_TABLES.items():
            g[name] = readonly(self.runtime.table_from({m: m for m in members}))
            names.append(f"{name} = {name},")
        self._base_env = self.runtime.execute("return function () return {" + BASE_ENV + " ".join(names) + "} end")
        logger.debug("Lua sandbox initialized (Lua %s.%s)", *self.runtime.lua_version)

    def to_lua(self, value: Any, seen: Optional[Dict[int, Any]] = None) -> Any:
        """Convert nested dicts/lists into Lua tables and callables into Lua closures.

        The same Python object always maps to the same Lua table.
        """
        if callable(value) and lupa.lua_type(value) is None:
            return self._wrap(value)
        if not isinstance(value, (dict, list, tuple)):
            return value
        if seen is None:
            seen = {}
        if id(value) in seen:
            return seen[id(value)]
        t = self.runtime.table()
        seen[id(value)] = t
        if isinstance(value, dict):
            for k, v in value.items():
                if v is not None:
                    t[k] = self.to_lua(v, seen)
        else:
            for i, v in enumerate(value, 1):
                t[i] = self.to_lua(v, seen)
        return t

    def create_env(self, bindings: Dict[str, Any]):
        env = self._base_env()
        seen: Dict[int, Any] = {}
        for k, v in bindings.items():
            if v is not None:
                env[k] = self.to_lua(v, seen)
        return env

    def run(self, code: str, bindings: Dict[str, Any]) -> Tuple[Any, Any]:
        """Run `code` as the body of a chunk whose _ENV is built from `bindings`.

        Returns (script return value, environment table). Raises ScriptError on
        compile errors, runtime errors or a `nil, message` return.
        """
        env = self.create_env(bindings)
        try:
            ret = self._run_sandboxed(code, env)
        except (lupa.LuaError, AttributeError, TypeError, ValueError) as e:
            raise ScriptError(str(e)) from e
        if isinstance(ret, tuple) and len(ret) == 2 and ret[0] is None and isinstance(ret[1], str):
            raise ScriptError(ret[1])
        return ret, env


def lua_type(value: Any) -> Optional[str]:
    """Lua type name of a value coming back from a script, or None for Python values."""
    return lupa.lua_type(value)
