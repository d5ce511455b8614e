from resume_builder.cli.app import main

main()
