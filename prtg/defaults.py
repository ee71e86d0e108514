"""Built-in defaults: paths, models, prompts and templates."""

from __future__ import annotations

# Paths are relative to the working directory of the run.
DEFAULT_PATHS = {
    "template_dir": ".github/ai-pr/templates",
    "rules_path": ".github/ai-pr/rules.json",
    "system_prompt_path": ".github/ai-pr/prompt.md",
    "legacy_template_dir": ".github/pull_request_templates",
    "legacy_rules_path": ".github/pr-rules.json",
    "legacy_system_prompt_path": ".github/pr-system-prompt.md",
}

DEFAULT_PROVIDER = "claude"
DEFAULT_TEMPLATE = "feature"
DEFAULT_MAIN_BRANCH = "main"
DEFAULT_UPDATE_MODE = "create-only"
DEFAULT_LOCATION = "us-central1"

MAX_TOKENS = 1000
TEMPERATURE = 0.7

OUTPUT_FILENAME = "pr-template-output.md"

AI_PLACEHOLDER = "<!-- AI will fill this automatically -->"
NOT_APPLICABLE = "N/A"

# Selection priority used when a rule does not declare one.
DEFAULT_PRIORITY = 999

DEFAULT_PROVIDERS = {
    "claude": {
        "model": "claude-3-5-sonnet-20241022",
        "api_key_env": "ANTHROPIC_API_KEY",
        "endpoint": "https://api.anthropic.com",
    },
    "openai": {
        "model": "gpt-4o",
        "api_key_env": "OPENAI_API_KEY",
        "endpoint": "https://api.openai.com/v1",
    },
    "google": {
        "model": "gemini-1.5-flash",
        "api_key_env": "GOOGLE_API_KEY",
        "endpoint": "https://generativelanguage.googleapis.com/v1beta",
    },
    "vertex-ai": {
        "model": "gemini-1.5-pro",
        "api_key_env": "VERTEX_AI_API_KEY",
        "endpoint": "https://{location}-aiplatform.googleapis.com/v1",
    },
    "groq": {
        "model": "llama-3.1-70b-versatile",
        "api_key_env": "GROQ_API_KEY",
        "endpoint": "https://api.groq.com/openai/v1",
    },
    "huggingface": {
        "model": "microsoft/DialoGPT-medium",
        "api_key_env": "HUGGINGFACE_API_KEY",
        "endpoint": "https://api-inference.huggingface.co/models",
    },
}

# Branch-name substring table, checked in this order.
DEFAULT_BRANCH_PATTERNS: dict[str, list[str]] = {
    "hotfix": ["hotfix"],
    "release": ["release"],
    "feature": ["feature", "feat"],
    "bugfix": ["bugfix", "bug", "fix"],
}

# Commit-message prefix table, checked in this order.
DEFAULT_COMMIT_PATTERNS: dict[str, list[str]] = {
    "hotfix": ["hotfix"],
    "feature": ["feat", "feature"],
    "bugfix": ["fix"],
    "release": ["release"],
}

DEFAULT_SYSTEM_PROMPT = f"""You are an AI assistant that analyzes Git diffs and fills out Pull Request templates automatically.

**Writing Guidelines:**
- Write in clear, concise English
- Keep markdown structure intact
- Replace only `{AI_PLACEHOLDER}` placeholders
- Leave empty sections as-is if no relevant information is found
- Focus on what changed, why it matters, and what reviewers should know

**Writing Style:**
- Be direct and technical
- Use bullet points for lists
- Highlight important changes or potential impacts
- Suggest specific areas for reviewer attention"""

DEFAULT_TEMPLATES = {
    "feature": f"""## 🎯 What does this PR do?

{AI_PLACEHOLDER}

## 🔄 Changes Made

{AI_PLACEHOLDER}

## 🧪 Testing

- [ ] Tests added/updated
- [ ] Manual testing completed

## 📝 Review Notes

{AI_PLACEHOLDER}""",
    "hotfix": f"""## 🚨 What's the issue?

{AI_PLACEHOLDER}

## 🔧 How is it fixed?

{AI_PLACEHOLDER}

## ⏰ Urgency Level

- [ ] Critical production issue
- [ ] Affects user experience
- [ ] Security vulnerability
- [ ] Minor issue

## 🧪 How to verify the fix

{AI_PLACEHOLDER}

## 🔗 Related Issues

- Fixes #""",
    "bugfix": f"""## 🐛 Bug Description

{AI_PLACEHOLDER}

## 🔧 Fix Applied

{AI_PLACEHOLDER}

## ✅ Testing

- [ ] Bug reproduction confirmed
- [ ] Fix tested locally
- [ ] Regression tests added

## 📝 Review Notes

{AI_PLACEHOLDER}""",
    "release": f"""## 🚀 Release Summary

{AI_PLACEHOLDER}

## 📋 Changes in this Release

{AI_PLACEHOLDER}

## 🧪 Testing Checklist

- [ ] All tests pass
- [ ] Manual QA completed
- [ ] Performance verified

## 📝 Release Notes

{AI_PLACEHOLDER}""",
    "default": f"""## Summary

{AI_PLACEHOLDER}

## Changes

{AI_PLACEHOLDER}

## Testing

{AI_PLACEHOLDER}

## Review Notes

{AI_PLACEHOLDER}""",
}
