from __future__ import annotations

import io
import unittest
from contextlib import redirect_stdout
from unittest import mock

from kaniko_plugin.build import BuildRequest, executor_args, run_executor


class ExecutorArgsTests(unittest.TestCase):
    def test_minimal_push(self) -> None:
        request = BuildRequest(
            dockerfile="Dockerfile",
            context=".",
            repo="myreg.example.com/myorg/app",
            tags=["latest", "1.0"],
        )
        self.assertEqual(
            executor_args(request),
            [
                "--dockerfile=Dockerfile",
                "--context=dir://.",
                "--destination=myreg.example.com/myorg/app:latest",
                "--destination=myreg.example.com/myorg/app:1.0",
                "--digest-file=/kaniko/digest-file",
            ],
        )

    def test_no_push_has_no_destinations(self) -> None:
        request = BuildRequest(dockerfile="Dockerfile", context=".", repo="app", tags=["latest"], no_push=True)
        args = executor_args(request)
        self.assertIn("--no-push", args)
        self.assertFalse(any(arg.startswith("--destination") for arg in args))

    def test_optional_flags(self) -> None:
        request = BuildRequest(
            dockerfile="docker/Dockerfile",
            context="src",
            repo="app",
            tags=["latest"],
            args=["A=1"],
            labels=["team=ci"],
            target="release",
            enable_cache=True,
            cache_repo="myreg.example.com/cache",
            cache_ttl=6,
            mirrors=["mirror.example.com"],
            skip_tls_verify=True,
            snapshot_mode="redo",
            verbosity="debug",
            platform="linux/arm64",
            skip_unused_stages=True,
        )
        args = executor_args(request)
        for expected in (
            "--build-arg=A=1",
            "--label=team=ci",
            "--target=release",
            "--cache=true",
            "--cache-repo=myreg.example.com/cache",
            "--cache-ttl=6h",
            "--registry-mirror=mirror.example.com",
            "--skip-tls-verify=true",
            "--snapshotMode=redo",
            "--verbosity=debug",
            "--customPlatform=linux/arm64",
            "--skip-unused-stages",
        ):
            self.assertIn(expected, args)

    def test_cache_repo_ignored_without_cache(self) -> None:
        request = BuildRequest(dockerfile="Dockerfile", context=".", repo="app", cache_repo="cache")
        self.assertFalse(any(arg.startswith("--cache") for arg in executor_args(request)))


class RunExecutorTests(unittest.TestCase):
    def test_invokes_executor_without_printing_build_args(self) -> None:
        request = BuildRequest(dockerfile="Dockerfile", context=".", repo="app", args=["TOKEN=secret"])
        out = io.StringIO()
        with mock.patch("kaniko_plugin.build.run_cmd") as run_cmd, redirect_stdout(out):
            run_executor(request, executor="/bin/executor")

        command = run_cmd.call_args.args[0]
        self.assertEqual(command[0], "/bin/executor")
        self.assertIn("--build-arg=TOKEN=secret", command)
        self.assertEqual(run_cmd.call_args.kwargs, {"capture_output": False})
        self.assertNotIn("secret", out.getvalue())


if __name__ == "__main__":
    unittest.main()
