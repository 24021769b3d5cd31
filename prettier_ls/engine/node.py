"""Drive an installed Prettier module through a Node.js subprocess."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Mapping, Optional

from prettier_ls.errors import EngineError
from prettier_ls.observability import get_logger

from .base import FileInfo, PrettierEngine, SupportInfo

# Reads a JSON payload from stdin, calls one Prettier API and writes
# {"result": ...} to stdout.  argv: <module path> <method>.
_BRIDGE_SCRIPT = r"""
const [modulePath, method] = process.argv.slice(1);
const prettier = require(modulePath);
let input = "";
process.stdin.setEncoding("utf8");
process.stdin.on("data", (chunk) => { input += chunk; });
process.stdin.on("end", async () => {
  try {
    const payload = input ? JSON.parse(input) : {};
    let result;
    switch (method) {
      case "format": result = await prettier.format(payload.text, payload.options); break;
      case "getFileInfo": result = await prettier.getFileInfo(payload.path, payload.options); break;
      case "getSupportInfo": result = await prettier.getSupportInfo(); break;
      case "resolveConfig": result = await prettier.resolveConfig(payload.path, payload.options); break;
      case "resolveConfigFile": result = await prettier.resolveConfigFile(payload.path); break;
      case "version": result = prettier.version; break;
      default: throw new Error(`Unknown method: ${method}`);
    }
    process.stdout.write(JSON.stringify({ result: result === undefined ? null : result }));
  } catch (error) {
    process.stderr.write(String((error && error.stack) || error));
    process.exitCode = 1;
  }
});
"""


class NodePrettierEngine(PrettierEngine):
    """Prettier engine backed by ``node -e`` calls into *module_path*."""

    def __init__(self, module_path: str, *, node_path: str = "node", version: Optional[str] = None) -> None:
        self.module_path = module_path
        self.node_path = node_path
        self.version = version
        self.logger = get_logger("prettier_ls.engine.node")
        self._support_info: Optional[SupportInfo] = None

    def __repr__(self) -> str:
        return f"NodePrettierEngine({self.module_path!r}, version={self.version!r})"

    async def _call(self, method: str, payload: Optional[Mapping[str, Any]] = None) -> Any:
        self.logger.debug("Calling prettier.%s from %s", method, self.module_path)
        try:
            process = await asyncio.create_subprocess_exec(
                self.node_path,
                "-e",
                _BRIDGE_SCRIPT,
                self.module_path,
                method,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise EngineError(
                f"Could not start Node.js ({self.node_path}): {exc}",
                path=self.module_path,
                hint="Install Node.js or set PRETTIER_LS_NODE_PATH.",
            ) from exc

        stdout, stderr = await process.communicate(json.dumps(payload or {}).encode("utf-8"))
        stderr_text = stderr.decode("utf-8", errors="replace")
        if process.returncode != 0:
            raise EngineError(
                f"prettier.{method} failed: {stderr_text.strip() or 'no output'}",
                path=self.module_path,
                stderr=stderr_text,
                exit_code=process.returncode,
            )
        try:
            data = json.loads(stdout.decode("utf-8"))
        except ValueError as exc:
            raise EngineError(
                f"prettier.{method} returned invalid output",
                path=self.module_path,
                stderr=stderr_text,
                exit_code=process.returncode,
            ) from exc
        return data.get("result")

    async def format(self, text: str, options: Mapping[str, Any]) -> str:
        result = await self._call("format", {"text": text, "options": dict(options)})
        if not isinstance(result, str):
            raise EngineError("prettier.format did not return text", path=self.module_path)
        return result

    async def get_file_info(self, path: str, options: Mapping[str, Any]) -> FileInfo:
        result = await self._call("getFileInfo", {"path": path, "options": dict(options)})
        return FileInfo.from_engine(result)

    async def get_support_info(self) -> SupportInfo:
        if self._support_info is None:
            self._support_info = SupportInfo.from_engine(await self._call("getSupportInfo"))
        return self._support_info

    async def resolve_config(self, path: str, options: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        result = await self._call("resolveConfig", {"path": path, "options": dict(options)})
        return dict(result) if isinstance(result, dict) else None

    async def resolve_config_file(self, path: str) -> Optional[str]:
        result = await self._call("resolveConfigFile", {"path": path})
        return result or None


__all__ = ["NodePrettierEngine"]
