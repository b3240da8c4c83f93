"""Localised strings for rendered notes and generated session text."""

from shared_types import Locale

LABELS: dict[Locale, dict[str, str]] = {
    Locale.ZH: {
        "observations_folder": "观察",
        "summaries_folder": "摘要",
        "untitled_observation": "无标题观察",
        "untitled_summary": "无标题摘要",
        "type": "类型",
        "time": "时间",
        "project": "项目",
        "facts": "事实",
        "narrative": "叙述",
        "concepts": "概念标签",
        "related_files": "相关文件",
        "files_read": "读取",
        "files_modified": "修改",
        "investigated": "调查内容",
        "learned": "学到的知识",
        "completed": "完成的工作",
        "next_steps": "下一步计划",
        "notes": "备注",
        "title_edit": "编辑 {name}",
        "title_edit_unnamed": "编辑文件",
        "title_write": "创建 {name}",
        "title_write_unnamed": "创建文件",
        "title_command": "执行命令: {command}",
        "title_tool": "{tool} 操作",
        "fact_file": "操作文件: {path}",
        "fact_command": "执行命令: {command}",
        "session_request": "会话 {session}",
        "session_investigated": "读取了 {count} 个文件",
        "session_completed": "修改了 {modified} 个文件，执行了 {operations} 个操作",
        "session_notes": "停止原因: {reason}",
        "summary_prompt": (
            "请为以下 Claude Code 会话生成一个简洁的中文摘要：\n\n"
            "会话信息：\n"
            "- 项目路径: {project_path}\n"
            "- 观察记录数: {observation_count}\n"
            "- 读取文件数: {read_count}\n"
            "- 修改文件数: {modified_count}\n\n"
            "观察记录：\n{observations}\n\n"
            "请生成一个包含以下内容的摘要（每项2-3句话）：\n"
            "1. 调查内容：主要查看和分析了什么\n"
            "2. 学到的知识：发现了什么重要信息或模式\n"
            "3. 完成的工作：具体做了哪些修改或操作\n"
            "4. 下一步计划：建议接下来做什么\n\n"
            "请直接返回摘要内容，不要包含标题或其他格式。"
        ),
    },
    Locale.EN: {
        "observations_folder": "Observations",
        "summaries_folder": "Summaries",
        "untitled_observation": "untitled observation",
        "untitled_summary": "untitled summary",
        "type": "Type",
        "time": "Time",
        "project": "Project",
        "facts": "Facts",
        "narrative": "Narrative",
        "concepts": "Concept tags",
        "related_files": "Related files",
        "files_read": "Read",
        "files_modified": "Modified",
        "investigated": "Investigated",
        "learned": "Learned",
        "completed": "Completed",
        "next_steps": "Next steps",
        "notes": "Notes",
        "title_edit": "Edit {name}",
        "title_edit_unnamed": "Edit file",
        "title_write": "Create {name}",
        "title_write_unnamed": "Create file",
        "title_command": "Run command: {command}",
        "title_tool": "{tool} operation",
        "fact_file": "File: {path}",
        "fact_command": "Command: {command}",
        "session_request": "Session {session}",
        "session_investigated": "Read {count} files",
        "session_completed": "Modified {modified} files across {operations} operations",
        "session_notes": "Stop reason: {reason}",
        "summary_prompt": (
            "Write a concise summary of the following Claude Code session.\n\n"
            "Session:\n"
            "- Project path: {project_path}\n"
            "- Observations: {observation_count}\n"
            "- Files read: {read_count}\n"
            "- Files modified: {modified_count}\n\n"
            "Observations:\n{observations}\n\n"
            "Cover, in 2-3 sentences each:\n"
            "1. Investigated: what was examined\n"
            "2. Learned: important findings or patterns\n"
            "3. Completed: concrete changes made\n"
            "4. Next steps: what to do next\n\n"
            "Return only the summary text, without headings."
        ),
    },
}


def get_labels(locale: str | Locale = Locale.ZH) -> dict[str, str]:
    """Label table for a locale, falling back to Chinese."""
    try:
        return LABELS[Locale(locale)]
    except ValueError:
        return LABELS[Locale.ZH]
