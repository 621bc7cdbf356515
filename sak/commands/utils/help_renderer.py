def render_help(registry) -> str:
    """One line per command in declaration order; nested registries are not expanded."""
    names = registry.list_commands()
    if not names:
        return ""

    pad = max(len(name) for name in names)
    pad_format = "  {name:" + str(pad) + "}  {description}"

    lines = [pad_format.format(name=d.name, description=d.description) for d in registry]
    return "\n".join(line.rstrip() for line in lines) + "\n"


def render_usage(ctx, registry) -> str:
    res = f"Usage: {ctx.prog} <command> [options]\n"
    res += "\nCommands:\n"
    res += render_help(registry)
    res += f"\nUse `{ctx.prog} <command> --help` for help on a command."
    return res
