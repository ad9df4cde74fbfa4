# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit your GitLab token. Put it in .env (gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # GitLab
    "TODOSYNC_GITLAB_HOST": "Base URL of the GitLab instance, e.g. https://gitlab.example.com.",
    "TODOSYNC_GITLAB_TOKEN": "Personal access token with read_api scope (never logged).",
    "TODOSYNC_HTTP_TIMEOUT_SECONDS": "HTTP timeout for GitLab requests (default: 30).",
    "TODOSYNC_TODOS_JSON": "Optional: read the To-Do list from this JSON dump instead of the API.",
    # todo.txt
    "TODOSYNC_TODO_FILE": "Path of the todo.txt file to sync (default: ~/.todo/todo.txt).",
    "TODOSYNC_CONTEXT_TAG": (
        "Context added to synced items (default: gitlab). Items without it are left alone. "
        "Empty or 'none' syncs every item in the file."
    ),
    "TODOSYNC_NO_ESCAPE_META": "Keep key:value, +project and @context from GitLab text as real tags (true/false).",
    "TODOSYNC_DONE_POLICY": "mark (default), add or ignore. See todotxt_sync.config.DonePolicy.",
    "TODOSYNC_DRY_RUN": "Print the resulting file to stdout instead of writing it (true/false).",
    # Logging
    "TODOSYNC_LOG_LEVEL": "Console logging level (default: INFO).",
    "TODOSYNC_LOG_DIR": "Directory for todotxt-sync.log (default: ~/.local/state/todotxt-sync).",
}
