from pi.datatable.cli import main

main()
