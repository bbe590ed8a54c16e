from napi_scaffold.cli import main

main()
