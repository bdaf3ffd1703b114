from appgen.utils.schemas import FileSpecEntry


def build_instruction_context(
    user_input: str,
    stack_name: str = "Python Flask",
    stack_version: str = "Flask v3",
) -> str:
    """Shared preamble sent with every file prompt of a run."""
    return (
        f"You are a {stack_name} expert. Your task is to help build or update a multi-file "
        f"{stack_version} web application based on the following request: '{user_input}'.\n"
        "You will be asked to generate or modify code for different components of the application.\n"
        "Provide only the code or content, without any explanations or Markdown formatting. "
        "Each response should be a complete, valid file for the specified component.\n"
        "If the file already exists, incorporate the new requirements while preserving existing functionality."
    )


def build_file_prompt(context: str, entry: FileSpecEntry) -> str:
    return f"{context}\n\n{entry.instruction}"
