from browser_test_runner.cli import main

main()
