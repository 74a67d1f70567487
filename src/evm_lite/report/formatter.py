"""Execution result rendering - JSON and Markdown output."""
from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from ..bytecode.parser import Instruction
from ..engine.alu import to_signed
from ..engine.state import ExecutionResult

__all__ = ["ResultFormatter", "format_word"]


def format_word(word: int) -> str:
    return f"0x{word:064x}"


class ResultFormatter:
    def __init__(self, label: str = "bytecode") -> None:
        self.label = label

    @staticmethod
    def _stack_to_list(result: ExecutionResult) -> list[dict[str, Any]]:
        return [
            {"depth": depth, "hex": format_word(word), "unsigned": str(word), "signed": str(to_signed(word))}
            for depth, word in enumerate(result.stack)
        ]

    def to_dict(self, result: ExecutionResult) -> dict[str, Any]:
        """Serialize a result into a structured report dictionary.

        Word values are emitted as strings, since JSON consumers commonly
        lose precision on integers above 2**53.
        """
        return {
            "label": self.label,
            "timestamp": datetime.now(UTC).isoformat(),
            "success": result.success,
            "halt_reason": result.halt_reason.value,
            "error": result.error,
            "pc": result.pc,
            "steps": result.steps,
            "gas_used": result.gas_used,
            "unknown_opcodes": list(result.unknown_opcodes),
            "stack": self._stack_to_list(result),
        }

    def to_json(self, result: ExecutionResult) -> str:
        return json.dumps(self.to_dict(result), indent=2)

    @staticmethod
    def _markdown_table(headers: list[str], rows: list[list[str]]) -> list[str]:
        sep = "|".join("-" * max(len(h), 3) for h in headers)
        lines = [
            "| " + " | ".join(headers) + " |",
            "|" + sep + "|",
        ]
        for row in rows:
            lines.append("| " + " | ".join(row) + " |")
        return lines

    def to_markdown(self, result: ExecutionResult) -> str:
        d = self.to_dict(result)
        lines = [
            f"# Execution Report: {self.label}",
            f"\nGenerated: {d['timestamp']}\n",
            "## Outcome\n",
            f"- **Success:** {'Yes' if d['success'] else 'No'}",
            f"- **Halt Reason:** {d['halt_reason']}",
            f"- **PC:** 0x{d['pc']:04X}",
            f"- **Steps:** {d['steps']}",
            f"- **Gas Used:** {d['gas_used']}",
        ]
        if d["error"]:
            lines.append(f"- **Error:** {d['error']}")
        if d["unknown_opcodes"]:
            lines.append("- **Skipped Opcodes At:** " + ", ".join(f"0x{o:04X}" for o in d["unknown_opcodes"]))
        lines.append("\n## Stack (top first)\n")
        if d["stack"]:
            lines.extend(self._markdown_table(
                ["Depth", "Hex", "Signed"],
                [[str(item["depth"]), f"`{item['hex']}`", item["signed"]] for item in d["stack"]],
            ))
        else:
            lines.append("_empty_")
        return "\n".join(lines)

    def disassembly_markdown(self, instructions: list[Instruction]) -> str:
        lines = [f"# Disassembly: {self.label}\n"]
        lines.extend(self._markdown_table(
            ["Offset", "Instruction", "Immediate"],
            [
                [
                    f"0x{ins.offset:04X}",
                    ins.name,
                    ("0x" + ins.operand.hex() + (" (truncated)" if ins.truncated else "")) if ins.operand else "",
                ]
                for ins in instructions
            ],
        ))
        return "\n".join(lines)
