"""Main entry point for the DevConnect CLI."""

from __future__ import annotations

import asyncio
import getpass
import sys

from devconnect_cli import __version__
from devconnect_cli.actions import SyncActions
from devconnect_cli.client import ApiClient
from devconnect_cli.config import Config
from devconnect_cli.state import ClientStore

# command -> (required positionals, optional positionals)
COMMANDS: dict[str, tuple[int, int]] = {
    "register": (2, 1),
    "login": (1, 1),
    "logout": (0, 0),
    "posts": (0, 0),
    "post": (1, 0),
    "like": (1, 0),
    "unlike": (1, 0),
    "comment": (2, 0),
    "profile": (0, 1),
    "profiles": (0, 0),
}

AUTH_REQUIRED = {"logout", "like", "unlike", "comment"}


def print_help():
    """Print help message."""
    print(f"""
DevConnect CLI v{__version__}

Usage:
  devconnect [options] <command> [args]

Commands:
  register NAME EMAIL [PASSWORD]   Create an account
  login EMAIL [PASSWORD]           Sign in and save the session token
  logout                           Sign out of the current environment
  posts                            List posts, newest first
  post ID                          Show one post with its comments
  like ID                          Like a post
  unlike ID                        Remove your like from a post
  comment ID TEXT                  Comment on a post
  profile [HANDLE]                 Show a profile (yours if no handle)
  profiles                         List every profile

Options:
  --api-url URL     Override API endpoint (default: http://localhost:8000)
  -h, --help        Show this help
  -v, --version     Show version

Environment:
  DEVCONNECT_API_URL   Override API endpoint (same as --api-url)
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str | None
        params: list[str]
        api_url: str | None
        show_help: bool
        show_version: bool
    """
    result = {
        "command": None,
        "params": [],
        "api_url": None,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg == "--api-url":
            if i + 1 < len(args):
                result["api_url"] = args[i + 1]
                i += 1
            else:
                print("Error: --api-url requires a URL")
                sys.exit(1)
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-") and result["command"] is None:
            print(f"Unknown option: {arg}")
            print("Run 'devconnect --help' for usage.")
            sys.exit(1)
        elif result["command"] is None:
            if arg not in COMMANDS:
                print(f"Unknown command: {arg}")
                print("Run 'devconnect --help' for usage.")
                sys.exit(1)
            result["command"] = arg
        else:
            result["params"].append(arg)

        i += 1

    command = result["command"]
    if command:
        required, optional = COMMANDS[command]
        if not required <= len(result["params"]) <= required + optional:
            print(f"Wrong number of arguments for '{command}'.")
            print("Run 'devconnect --help' for usage.")
            sys.exit(1)

    return result


def format_post(post: dict, with_comments: bool = False) -> str:
    likes = len(post.get("likes", []))
    comments = post.get("comments", [])
    lines = [
        f"[{post['_id']}] {post.get('name') or 'anonymous'} ({post.get('date', '')})",
        f"  {post['text']}",
        f"  {likes} like(s), {len(comments)} comment(s)",
    ]
    if with_comments:
        for comment in comments:
            lines.append(f"    - [{comment['_id']}] {comment.get('name') or 'anonymous'}: {comment['text']}")
    return "\n".join(lines)


def format_profile(profile: dict) -> str:
    user = profile.get("user")
    name = user.get("name") if isinstance(user, dict) else user
    lines = [f"{name} (@{profile['handle']})", f"  {profile.get('status', '')}"]
    if profile.get("company"):
        lines.append(f"  at {profile['company']}")
    if profile.get("skills"):
        lines.append(f"  skills: {', '.join(profile['skills'])}")
    for exp in profile.get("experience", []):
        lines.append(f"  * {exp['title']} at {exp['company']} (from {exp['from']})")
    for edu in profile.get("education", []):
        lines.append(f"  * {edu['degree']} in {edu['fieldOfStudy']}, {edu['school']}")
    return "\n".join(lines)


def print_errors(errors: dict):
    if not errors:
        print("Request failed.")
        return
    for field, message in errors.items():
        print(f"Error ({field}): {message}")


async def run(command: str, params: list[str], config: Config) -> bool:
    """Run one command against the API. Returns True on success."""
    client = ApiClient(config.api_url, token=config.token)
    store = ClientStore()
    actions = SyncActions(client, store)

    try:
        if config.token:
            await actions.set_current_user(config.token)

        if command == "register":
            name, email = params[0], params[1]
            password = params[2] if len(params) > 2 else getpass.getpass("Password: ")
            user = await actions.register_user(
                {"name": name, "email": email, "password": password, "password2": password}
            )
            if user:
                print(f"Registered {user['email']}. Run 'devconnect login {user['email']}' to sign in.")
            ok = user is not None

        elif command == "login":
            email = params[0]
            password = params[1] if len(params) > 1 else getpass.getpass("Password: ")
            user = await actions.login_user({"email": email, "password": password})
            if user:
                config.save_session(client.token, email)
                print(f"Logged in to {config.api_url} as {user['name']}")
            ok = user is not None

        elif command == "logout":
            await actions.logout_user()
            config.clear_session()
            print(f"Logged out of {config.api_url}")
            ok = True

        elif command == "posts":
            posts = await actions.get_posts()
            for post in posts or []:
                print(format_post(post))
            if posts == []:
                print("No posts yet.")
            ok = posts is not None

        elif command == "post":
            post = await actions.get_post(params[0])
            if post:
                print(format_post(post, with_comments=True))
            else:
                print(f"No post found with ID {params[0]}")
            ok = post is not None

        elif command in ("like", "unlike"):
            op = actions.add_like if command == "like" else actions.remove_like
            post = await op(params[0])
            if post:
                print(format_post(post))
            ok = post is not None

        elif command == "comment":
            post = await actions.add_comment(params[0], {"text": params[1]})
            if post:
                print(format_post(post, with_comments=True))
            ok = post is not None

        elif command == "profile":
            if params:
                profile = await actions.get_profile_by_handle(params[0])
            else:
                profile = await actions.get_current_profile()
            if profile:
                print(format_profile(profile))
            else:
                print("No profile found.")
            ok = profile is not None

        elif command == "profiles":
            profiles = await actions.get_profiles()
            for profile in profiles or []:
                print(format_profile(profile))
            if not profiles:
                print("There are no profiles.")
            ok = profiles is not None

        else:
            raise ValueError(f"Unhandled command: {command}")

        if not ok and store.state["errors"]:
            print_errors(store.state["errors"])
        return ok

    finally:
        store.close()
        await client.close()


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    if args["show_help"] or args["command"] is None:
        print_help()
        return

    if args["show_version"]:
        print(f"devconnect-cli {__version__}")
        return

    config = Config(api_url_override=args["api_url"])

    if args["command"] in AUTH_REQUIRED and not config.is_authenticated:
        print(f"Not authenticated to {config.api_url}")
        print("Run 'devconnect login EMAIL' first.")
        sys.exit(1)

    success = asyncio.run(run(args["command"], args["params"], config))
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
