#!/usr/bin/env python3
"""
Demo of the requirements checker.
Shows literal, callable and deferred conditions, chained checks and the
three report formats.
"""

from reqcheck import RequirementsChecker, StaticEnvironment


def demo_live_environment():
    """Check the running interpreter."""
    print("=" * 70)
    print(" " * 15 + "Demo 1: Live Environment Check")
    print("=" * 70)

    checker = RequirementsChecker()
    checker.check([
        {
            "name": "Python 3.10+",
            "mandatory": True,
            "condition": "eval:check_extension_version('python', '3.10')",
            "by": "Application runtime",
        },
        {
            "name": "rich",
            "condition": lambda: checker.predicates.check_extension_version("rich", "13.0"),
            "by": "Terminal report",
        },
    ])
    print(checker.render("console"))


def demo_chained_checks():
    """Accumulate two requirement sets into one report."""
    print("\n" + "=" * 70)
    print(" " * 15 + "Demo 2: Chained Requirement Sets")
    print("=" * 70)

    environment = StaticEnvironment(
        extensions={"pdo": "8.2.0"},
        ini={"post_max_size": "8M", "upload_max_filesize": "2M", "display_errors": "On"},
    )
    checker = RequirementsChecker(environment)
    checker.check({
        "PDO extension": {"mandatory": True, "condition": "eval:check_extension_version('pdo', '8.0')"},
        "Upload size": {"condition": "eval:check_upload_max_file_size('5M')", "by": "File uploads"},
    }).check([
        {"name": "Display errors off", "required": True, "condition": "eval:check_ini_off('display_errors')"},
    ])
    print(checker.render("console"))


def demo_json_output():
    """JSON output mode for automation."""
    print("\n" + "=" * 70)
    print(" " * 15 + "Demo 3: JSON Output Mode")
    print("=" * 70)

    checker = RequirementsChecker(StaticEnvironment(extensions={"pdo": "8.2.0"}))
    checker.check([{"name": "PDO", "condition": "eval:check_extension_version('pdo', '9.0', '<')"}])
    print(checker.render("json"))


if __name__ == "__main__":
    demo_live_environment()
    demo_chained_checks()
    demo_json_output()
