from agentdesk.tools.delivery import EmailDraftTool, GitPatchTool, StyleQATool


def test_style_qa_flags_todo_markers():
    tool = StyleQATool()
    result = tool.run({"doc": "Intro paragraph. TODO: finish CTA.", "checklist": "Docs/checklists/text.yml"})
    assert result["verdict"] == "revise"
    assert result["findings"][0]["type"] == "tone"


def test_style_qa_accepts_clean_doc():
    tool = StyleQATool()
    result = tool.run({"doc": "A finished landing page.", "checklist": "Docs/checklists/text.yml"})
    assert result == {"findings": [], "verdict": "accept"}


def test_style_qa_applies_inline_checklist():
    tool = StyleQATool()
    checklist = "banned_terms:\n  - cheap\nrequired_terms:\n  - pricing\n"
    result = tool.run({"doc": "Cheap offers for everyone.", "checklist": checklist})
    types = sorted(finding["type"] for finding in result["findings"])
    assert types == ["coverage", "terminology"]


def test_style_qa_reads_checklist_file(tmp_path):
    checklist = tmp_path / "translate.yml"
    checklist.write_text("required_terms: [CTA]\n", encoding="utf-8")
    result = StyleQATool().run({"doc": "Hero copy only.", "checklist": str(checklist)})
    assert result["verdict"] == "revise"
    assert "CTA" in result["findings"][0]["msg"]


def test_git_patch_commit_id_uses_message():
    result = GitPatchTool().run({"repo_path": "/repo", "patch": "diff", "message": "fix hero copy"})
    assert result["commit"] == "mocked-commit-for-fix-hero-copy"


def test_email_draft_id_is_stable_per_subject():
    tool = EmailDraftTool()
    first = tool.run({"to": ["a@example.com"], "subject": "Delivery", "html": "<p>Hi</p>"})
    second = tool.run({"to": ["b@example.com"], "subject": "Delivery", "html": "<p>Yo</p>"})
    assert first["draft_id"] == second["draft_id"]
    assert first["recipients"] == ["a@example.com"]


def test_style_qa_treats_scalar_terms_as_single_terms():
    tool = StyleQATool()
    clean = tool.run({"doc": "A finished landing page.", "checklist": "banned_terms: cheap\n"})
    assert clean == {"findings": [], "verdict": "accept"}

    flagged = tool.run({"doc": "Cheap landing page.", "checklist": "banned_terms: cheap\n"})
    assert [finding["msg"] for finding in flagged["findings"]] == ["Banned term present: cheap"]


def test_style_qa_handles_numeric_and_nested_terms():
    tool = StyleQATool()
    result = tool.run({"doc": "Five steps to launch.", "checklist": "required_terms: 5\nbanned_terms: {a: b}\n"})
    assert result["verdict"] == "revise"
    assert result["findings"] == [{"type": "coverage", "msg": "Required term missing: 5"}]

    assert tool.run({"doc": "5 steps.", "checklist": "required_terms: 5\n"})["verdict"] == "accept"
