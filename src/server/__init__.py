"""HTTP front end for lakebook2md."""
