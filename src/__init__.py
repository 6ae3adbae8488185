"""plagscan: source-code plagiarism detection."""
